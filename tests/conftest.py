"""Pytest configuration and shared fixtures.

Organization:
    - Environment: keep settings isolated from the developer's conf/ and .env
    - ACL Fixtures: builders and built ACLs shared across suites
    - Application Fixtures: FastAPI app wired to a test ACL
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from fastapi import FastAPI

from graph_acl.core.acl import Acl, AclBuilder
from graph_acl.core.settings import AclSettings, clear_all_caches

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Point the conf.d YAML sources at a directory that never exists
os.environ.setdefault("ACL_CONFIG_DIR", str(FIXTURES_DIR / "no-conf"))
os.environ.setdefault("LOGGING_CONFIG_DIR", str(FIXTURES_DIR / "no-conf"))


# ============================================================================
# Environment
# ============================================================================


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Drop cached settings so env changes made by a test never leak."""
    clear_all_caches()
    yield
    clear_all_caches()


# ============================================================================
# ACL Fixtures
# ============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def hierarchy_builder() -> AclBuilder:
    """Builder with the guest < user < admin and index < blog hierarchies, no rules.

    Example:
        def test_something(hierarchy_builder):
            acl = hierarchy_builder.allow("guest", "index").build()
            assert acl.is_allowed("admin", "blog", "read")
    """
    return (
        AclBuilder()
        .add_role("guest")
        .add_role("user", ["guest"])
        .add_role("admin", ["user"])
        .add_resource("index")
        .add_resource("blog", ["index"])
    )


@pytest.fixture
def blog_acl(hierarchy_builder: AclBuilder) -> Acl:
    """A small blogging ACL.

    - guests may read everything under ``index``
    - users may also write and comment on ``blog``
    - guests may never delete anything
    - admins may do anything
    """
    return (
        hierarchy_builder.add_resource("admin_panel")
        .deny("guest", None, "delete")
        .allow("guest", "index", "read")
        .allow("user", "blog", ["write", "comment"])
        .allow("admin")
        .build()
    )


@pytest.fixture
def acl_settings() -> AclSettings:
    """Explicit settings so HTTP tests never depend on the environment."""
    return AclSettings(
        data_file=None,
        role_header="X-User-Role",
        resource_header="X-Resource",
        privilege_header="X-Privilege",
        default_role="guest",
        exempt_paths=["/health"],
    )


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def acl_app(blog_acl: Acl) -> FastAPI:
    """Bare FastAPI app with ``blog_acl`` installed on ``app.state``."""
    app = FastAPI()
    app.state.acl = blog_acl
    return app
