"""
Pytest configuration and fixtures for the editor tests.
"""

import pytest

from aieditor.db import LocalStorage
from aieditor.models import WorkspaceState
from aieditor.session import EditorSession


@pytest.fixture
def storage_path(tmp_path):
    return str(tmp_path / "storage.json")


@pytest.fixture
def storage(storage_path):
    return LocalStorage(storage_path)


@pytest.fixture
def session(storage):
    """A session with all three buffers emptied"""
    session = EditorSession(storage)
    session.store.clear()
    session.status.clear()
    return session


def make_state(html: str = "", css: str = "", js: str = "", component_mode: bool = False) -> WorkspaceState:
    state = WorkspaceState(component_mode=component_mode)
    state.html.content = html
    state.css.content = css
    state.js.content = js
    return state
