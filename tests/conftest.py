import json
import sys
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from types import SimpleNamespace

import pytest

# Ensure the repository root (parent directory of this file) is on the import path
# so tests can `import digest...` and `import librarydigest` from any cwd.
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))


# ---------------------------------------------------------------------------
# Stand-ins for plexapi library sections, artists and albums. Each accessor
# records the call so tests can check what was requested.
# ---------------------------------------------------------------------------

class FakeAlbum:
    def __init__(self, title, ntracks, error=None):
        self.title = title
        self._ntracks = ntracks
        self._error = error

    def tracks(self):
        if self._error:
            raise self._error
        return [SimpleNamespace(title=f"{self.title} #{i}") for i in range(self._ntracks)]


class FakeArtist:
    def __init__(self, title, albums, error=None):
        self.title = title
        self._albums = albums
        self._error = error

    def albums(self):
        if self._error:
            raise self._error
        return list(self._albums)


class FakeSection:
    def __init__(self, title, type, items=None, artists=None, error=None):
        self.title = title
        self.type = type
        self._items = items or []
        self._artists = artists or []
        self._error = error
        self.calls = []

    def all(self):
        self.calls.append("all")
        if self._error:
            raise self._error
        return list(self._items)

    def searchArtists(self):
        self.calls.append("searchArtists")
        if self._error:
            raise self._error
        return list(self._artists)


class FakeLibrary:
    def __init__(self, sections, error=None):
        self._sections = sections
        self._error = error

    def sections(self):
        if self._error:
            raise self._error
        return list(self._sections)


class FakePlex:
    def __init__(self, sections, error=None):
        self.friendlyName = "fake-plex"
        self.library = FakeLibrary(sections, error=error)


def movie_section(title, n, **kw):
    return FakeSection(title, "movie", items=[SimpleNamespace(title=f"m{i}") for i in range(n)], **kw)


def show_section(title, n, **kw):
    return FakeSection(title, "show", items=[SimpleNamespace(title=f"s{i}") for i in range(n)], **kw)


def music_section(title, artists, **kw):
    """`artists` is a list of lists of track counts, one inner list per artist."""
    built = [
        FakeArtist(f"artist{a}", [FakeAlbum(f"album{a}.{b}", n) for b, n in enumerate(albums)])
        for a, albums in enumerate(artists)
    ]
    return FakeSection(title, "artist", artists=built, **kw)


@pytest.fixture
def plex_helpers():
    return SimpleNamespace(
        movie=movie_section,
        show=show_section,
        music=music_section,
        section=FakeSection,
        artist=FakeArtist,
        album=FakeAlbum,
        plex=FakePlex,
    )


@pytest.fixture
def scenario_plex(plex_helpers):
    """Films (12 movies), Shows (5 shows), Tunes (2 artists, 3 albums, 6 tracks)."""
    return plex_helpers.plex([
        plex_helpers.movie("Films", 12),
        plex_helpers.show("Shows", 5),
        plex_helpers.music("Tunes", [[3, 2], [1]]),
    ])


@pytest.fixture
def config_file(tmp_path):
    def _write(username="Library Digest", webhook="https://discord.example/api/webhooks/1/abc"):
        p = tmp_path / "config.yml"
        p.write_text(
            "config:\n"
            "  token: secret-token\n"
            "  host: http://plex.local:32400\n"
            f"  webhook: {webhook}\n"
            f"  username: \"{username}\"\n",
            encoding="utf-8",
        )
        return str(p)
    return _write


# ---------------------------------------------------------------------------
# Local webhook endpoints. `webhook_server` records each POST and answers with
# `server.status`; `slow_webhook` answers the status line at once and then
# dribbles one header per second for six seconds.
# ---------------------------------------------------------------------------

class _RecordingHandler(BaseHTTPRequestHandler):
    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length)
        self.server.requests.append({
            "path": self.path,
            "headers": dict(self.headers),
            "json": json.loads(body) if body else None,
        })
        self.send_response(self.server.status)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def log_message(self, *args):
        pass


class _SlowHandler(_RecordingHandler):
    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        self.rfile.read(length)
        self.server.requests.append({"path": self.path})
        try:
            self.wfile.write(b"HTTP/1.1 204 No Content\r\n")
            self.wfile.flush()
            for i in range(6):
                time.sleep(1)
                self.wfile.write(f"X-Slow-{i}: x\r\n".encode())
                self.wfile.flush()
            self.wfile.write(b"Content-Length: 0\r\n\r\n")
        except (BrokenPipeError, ConnectionResetError):
            pass
        self.close_connection = True


def _serve(handler):
    server = ThreadingHTTPServer(("127.0.0.1", 0), handler)
    server.requests = []
    server.status = 204
    server.url = f"http://127.0.0.1:{server.server_address[1]}/api/webhooks/1/abc"
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return server


@pytest.fixture
def webhook_server():
    server = _serve(_RecordingHandler)
    yield server
    server.shutdown()
    server.server_close()


@pytest.fixture
def slow_webhook():
    server = _serve(_SlowHandler)
    yield server
    server.shutdown()
    server.server_close()
