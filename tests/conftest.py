import io
import json
import time
import zipfile
from pathlib import Path
from unittest.mock import MagicMock

import platformdirs
import pytest
import requests

_NETWORK_BLOCK_MSG = (
    "Network access is blocked during tests. Mock requests.* or Session.request."
)


def _block_network(*_args, **_kwargs):
    """
    Prevent network calls in tests by raising a RuntimeError.

    Raises:
        RuntimeError: with `_NETWORK_BLOCK_MSG` indicating that network access is blocked during tests.
    """
    raise RuntimeError(_NETWORK_BLOCK_MSG)


def pytest_configure(config):
    """Register the markers used across the suite."""
    config.addinivalue_line("markers", "unit: fast tests without I/O beyond tmp_path")
    config.addinivalue_line(
        "markers", "integration: tests that run a whole download operation"
    )


@pytest.fixture(autouse=True)
def _isolate_test_environment(tmp_path_factory, monkeypatch):
    """
    Point platformdirs and the neufetch settings module at a temporary directory tree.

    Sets XDG_* variables, patches platformdirs user_* functions, and updates
    neufetch.settings.CONFIG_DIR / SETTINGS_FILE so no test touches the real
    user configuration.
    """
    base = tmp_path_factory.mktemp("neufetch")
    cache_dir = base / "cache"
    state_dir = base / "state"
    config_dir = base / "config"
    log_dir = state_dir / "log"

    for path in (cache_dir, state_dir, config_dir, log_dir):
        path.mkdir(parents=True, exist_ok=True)

    monkeypatch.setenv("XDG_CACHE_HOME", str(cache_dir))
    monkeypatch.setenv("XDG_STATE_HOME", str(state_dir))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_dir))

    monkeypatch.setattr(
        platformdirs, "user_cache_dir", lambda *_args, **_kwargs: str(cache_dir)
    )
    monkeypatch.setattr(
        platformdirs, "user_config_dir", lambda *_args, **_kwargs: str(config_dir)
    )
    monkeypatch.setattr(
        platformdirs, "user_log_dir", lambda *_args, **_kwargs: str(log_dir)
    )

    import neufetch.settings as settings

    monkeypatch.setattr(settings, "CONFIG_DIR", str(config_dir))
    monkeypatch.setattr(
        settings,
        "SETTINGS_FILE",
        str(Path(config_dir) / settings.SETTINGS_FILE_NAME),
    )


def pytest_runtest_setup():
    """
    Prevent real network requests during tests by replacing HTTP entry points with blocking callables.
    """
    requests.get = _block_network
    requests.post = _block_network
    requests.head = _block_network
    requests.Session.request = _block_network


@pytest.fixture(autouse=True)
def _mock_time_sleep(monkeypatch):
    """Make time.sleep instant for all tests."""
    monkeypatch.setattr(time, "sleep", lambda *_args, **_kwargs: None)


# =============================================================================
# HTTP and archive helpers
# =============================================================================


def make_response(status_code=200, body=b"", chunk_size=4):
    """
    Build a mocked requests.Response usable directly or as a context manager.

    Parameters:
        status_code (int): Status exposed on the response; 4xx/5xx make raise_for_status raise.
        body (bytes | str): Payload exposed through `.text`, `.content` and `iter_content`.
        chunk_size (int): Size of the chunks yielded by `iter_content`.
    """
    if isinstance(body, str):
        body = body.encode("utf-8")

    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.content = body
    response.text = body.decode("utf-8", errors="replace")
    response.iter_content.side_effect = lambda chunk_size=chunk_size, **_: iter(
        [body[i : i + chunk_size] for i in range(0, len(body), chunk_size)]
    )
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Error", response=response
        )
    return response


def make_zip(members):
    """
    Build an in-memory ZIP archive.

    Parameters:
        members (dict[str, bytes | str]): Archive member names mapped to contents.

    Returns:
        bytes: The archive bytes.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, content in members.items():
            zf.writestr(name, content)
    return buffer.getvalue()


class FakeGitHub:
    """
    Routes mocked `requests.get` calls to canned responses by exact URL.

    Unknown URLs answer 404. Every requested URL is recorded in `calls`.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, url, body=b"", status_code=200):
        self.routes[url] = (status_code, body)

    def add_release(self, repo, tag):
        self.add(
            f"https://api.github.com/repos/neutralinojs/{repo}/releases/latest",
            json.dumps({"tag_name": tag}),
        )

    def api_calls(self):
        return [url for url in self.calls if url.startswith("https://api.github.com")]

    def get(self, url, *_args, **_kwargs):
        self.calls.append(url)
        status_code, body = self.routes.get(url, (404, b"Not Found"))
        return make_response(status_code, body)


@pytest.fixture
def fake_github(mocker):
    """Patch `requests.get` with a FakeGitHub router and return the router."""
    router = FakeGitHub()
    mocker.patch("requests.get", side_effect=router.get)
    return router


@pytest.fixture
def project_dir(tmp_path):
    """
    Create a project directory holding a neutralino.config.json.

    Returns:
        Callable[[dict], Path]: Factory writing the given `cli` section and returning the project path.
    """

    def _create(cli=None):
        project = tmp_path / "app"
        project.mkdir(exist_ok=True)
        config = {"applicationId": "js.neutralino.sample", "cli": cli or {}}
        (project / "neutralino.config.json").write_text(json.dumps(config, indent=2))
        return project

    return _create


@pytest.fixture
def mock_response():
    """Provide the `make_response` factory to tests."""
    return make_response


@pytest.fixture
def zip_bytes():
    """Provide the `make_zip` factory to tests."""
    return make_zip
