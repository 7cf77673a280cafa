"""
Pytest configuration to ensure paths are set up correctly for tests.

This allows imports like `from handlers import articles` to work
when running tests, simulating the Lambda environment where code
is deployed from the src/ directory.
"""

import os
import sys
from pathlib import Path

import pytest


def _ensure_paths_on_sys_path() -> None:
    """Add repository root AND src/ to sys.path if missing.

    The src/ directory is added to simulate Lambda's import behavior,
    where Code.from_asset("src") makes src/ the root of the package.
    """
    repo_root = Path(__file__).resolve().parents[1]
    src_root = repo_root / "src"

    # Add repo root first (for imports like infrastructure.*)
    root_str = str(repo_root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)

    # Add src/ for Lambda-style imports (from handlers import ...)
    src_str = str(src_root)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


_ensure_paths_on_sys_path()

# Offline-friendly defaults so nothing reaches AWS or a database.
os.environ.setdefault("AWS_REGION", "eu-west-2")
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-2")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")
os.environ.setdefault("ENVIRONMENT", "dev")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.pop("DATABASE_URL", None)
os.environ.pop("DB_SECRET_ARN", None)

from models.article import Actor, Role  # noqa: E402
from models.text_module import TextModule  # noqa: E402
from models.ticket import Group, Signature, Ticket  # noqa: E402
from repositories.memory_repo import MemoryArticleRepository, MemoryDirectory  # noqa: E402
from services.article_service import ArticleService  # noqa: E402
from services.notification_service import MemoryPublisher  # noqa: E402


@pytest.fixture
def agent() -> Actor:
    return Actor(
        id="agent-1",
        role=Role.AGENT,
        firstname="Nicole",
        lastname="Braun",
        email="nicole.braun@example.com",
    )


@pytest.fixture
def customer() -> Actor:
    return Actor(
        id="customer-1",
        role=Role.CUSTOMER,
        firstname="Jane",
        lastname="Doe",
        email="jane@example.com",
    )


@pytest.fixture
def signature() -> Signature:
    return Signature(id="sig-1", name="Support", body="#{user.firstname}<br>Signature!")


@pytest.fixture
def group(signature) -> Group:
    return Group(id="grp-1", name="Users", signature_id=signature.id)


@pytest.fixture
def ticket(group, customer) -> Ticket:
    return Ticket(
        id="t-1", title="Printer on fire", group=group, customer=customer, owner_id="agent-1"
    )


@pytest.fixture
def text_module() -> TextModule:
    return TextModule(
        id="tm-1",
        name="test",
        keywords="greeting, hello",
        content=(
            "Hello, #{ticket.customer.firstname}!"
            " Ticket #{ticket.title} has group #{ticket.group.name}."
        ),
    )


@pytest.fixture
def directory(ticket, signature, text_module) -> MemoryDirectory:
    return MemoryDirectory(tickets=[ticket], signatures=[signature], text_modules=[text_module])


@pytest.fixture
def publisher() -> MemoryPublisher:
    return MemoryPublisher()


@pytest.fixture
def article_repo() -> MemoryArticleRepository:
    return MemoryArticleRepository()


@pytest.fixture
def article_service(article_repo, directory, publisher) -> ArticleService:
    return ArticleService(article_repo, directory, publisher)
