from models.ticket import Group, Signature
from services.signature_service import SignatureService, strip_signature


def test_active_signature_lookup(directory, group, signature):
    service = SignatureService(directory)
    assert service.active_signature_for(group) == signature


def test_group_without_signature(directory):
    service = SignatureService(directory)
    assert service.active_signature_for(Group(id="g2", name="Sales")) is None


def test_unknown_signature_id(directory):
    service = SignatureService(directory)
    assert service.active_signature_for(Group(id="g3", name="X", signature_id="gone")) is None


def test_render_escapes_values_but_keeps_markup(directory, agent, ticket):
    service = SignatureService(directory)
    signature = Signature(
        id="s", name="s", body="#{user.firstname} #{user.lastname}<br>#{ticket.group.name} #{user.phone}"
    )
    hostile = agent.model_copy(update={"firstname": "<b>Nic</b>"})

    rendered = service.render(signature, hostile, ticket)

    assert rendered == "&lt;b&gt;Nic&lt;/b&gt; Braun<br>Users -"


def test_append_and_strip_roundtrip(directory, agent, ticket, signature):
    service = SignatureService(directory)
    body = service.append("<p>Hello</p>", signature, agent, ticket)

    assert body.endswith(
        '<div data-signature="true" data-signature-id="sig-1"><p>Nicole<br>Signature!</p></div>'
    )
    assert strip_signature(body) == "<p>Hello</p>"


def test_strip_leaves_body_without_signature_alone():
    assert strip_signature("<p>a</p><p><br></p><p>b</p>") == "<p>a</p><p><br></p><p>b</p>"
