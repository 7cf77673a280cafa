"""
Article channel policy.

All role and channel dependent behaviour lives in the two tables below so
that the intake service stays free of per-channel branching and the policy
can be checked exhaustively in tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Tuple

from models.article import Channel, ChannelKind, ContentType, Role, Sender, Visibility


@dataclass(frozen=True)
class ChannelSpec:
    """Static metadata for one channel."""

    kind: ChannelKind
    content_type: ContentType
    required_fields: FrozenSet[str] = frozenset()
    attachments_allowed: bool = True
    appends_initials: bool = False
    reply_to_sender: bool = False


@dataclass(frozen=True)
class ArticleDefaults:
    """What a role gets on a channel when the client does not say otherwise."""

    visibility: Visibility
    sender: Sender
    visibility_overridable: bool = True


CHANNEL_SPECS: Dict[Channel, ChannelSpec] = {
    Channel.NOTE: ChannelSpec(ChannelKind.NOTE, ContentType.HTML),
    Channel.EMAIL: ChannelSpec(
        ChannelKind.EMAIL, ContentType.HTML, required_fields=frozenset({"to"})
    ),
    Channel.PHONE: ChannelSpec(ChannelKind.PHONE, ContentType.HTML),
    Channel.SMS: ChannelSpec(ChannelKind.SMS, ContentType.PLAIN, attachments_allowed=False),
    Channel.TELEGRAM: ChannelSpec(ChannelKind.MESSENGER, ContentType.PLAIN),
    Channel.TWITTER_STATUS: ChannelSpec(
        ChannelKind.SOCIAL_POST,
        ContentType.PLAIN,
        attachments_allowed=False,
        appends_initials=True,
    ),
    Channel.TWITTER_DM: ChannelSpec(
        ChannelKind.SOCIAL_POST,
        ContentType.PLAIN,
        attachments_allowed=False,
        appends_initials=True,
        reply_to_sender=True,
    ),
    Channel.FACEBOOK_COMMENT: ChannelSpec(
        ChannelKind.SOCIAL_POST, ContentType.PLAIN, attachments_allowed=False
    ),
    Channel.WEB: ChannelSpec(ChannelKind.WEB, ContentType.HTML),
}

_AGENT_PUBLIC = ArticleDefaults(Visibility.PUBLIC, Sender.AGENT)

ROLE_DEFAULTS: Dict[Tuple[Role, Channel], ArticleDefaults] = {
    (Role.AGENT, Channel.NOTE): ArticleDefaults(Visibility.INTERNAL, Sender.AGENT),
    (Role.AGENT, Channel.EMAIL): _AGENT_PUBLIC,
    (Role.AGENT, Channel.PHONE): _AGENT_PUBLIC,
    (Role.AGENT, Channel.SMS): _AGENT_PUBLIC,
    (Role.AGENT, Channel.TELEGRAM): _AGENT_PUBLIC,
    (Role.AGENT, Channel.TWITTER_STATUS): _AGENT_PUBLIC,
    (Role.AGENT, Channel.TWITTER_DM): _AGENT_PUBLIC,
    (Role.AGENT, Channel.FACEBOOK_COMMENT): _AGENT_PUBLIC,
    (Role.CUSTOMER, Channel.WEB): ArticleDefaults(
        Visibility.PUBLIC, Sender.CUSTOMER, visibility_overridable=False
    ),
}

DEFAULT_CHANNEL: Dict[Role, Channel] = {
    Role.AGENT: Channel.NOTE,
    Role.CUSTOMER: Channel.WEB,
}


def channel_spec(channel: Channel) -> ChannelSpec:
    return CHANNEL_SPECS[channel]


def defaults_for(role: Role, channel: Channel) -> Optional[ArticleDefaults]:
    """Defaults for the pair, or None when the role may not use the channel."""
    return ROLE_DEFAULTS.get((role, channel))


def allowed_channels(role: Role) -> Tuple[Channel, ...]:
    """Channels a role may create articles on, in enum order."""
    return tuple(channel for channel in Channel if (role, channel) in ROLE_DEFAULTS)


def resolve_visibility(defaults: ArticleDefaults, requested: Optional[Visibility]) -> Visibility:
    """Apply a requested override if the role/channel pair allows it."""
    if requested is None or not defaults.visibility_overridable:
        return defaults.visibility
    return requested
