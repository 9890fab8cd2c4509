from pathlib import Path

import pytest
from PIL import Image

from conftest import FakeResponse, FakeSession, image_bytes
from poster_finder import Main
from poster_finder.config import API_KEY_ENV, OMDB_BASE_URL

POSTER_URL = "https://img.example.com/poster.png"


@pytest.fixture
def fake_session(monkeypatch) -> FakeSession:
    session = FakeSession()
    monkeypatch.setattr(Main, "new_session", lambda: session)
    return session


@pytest.fixture
def api_key(monkeypatch) -> str:
    monkeypatch.setenv(API_KEY_ENV, "secret")
    return "secret"


def test_missing_api_key_is_fatal(tmp_path: Path, monkeypatch, fake_session) -> None:
    monkeypatch.delenv(API_KEY_ENV, raising=False)
    (tmp_path / "Heat (1995).iso").write_bytes(b"iso")

    assert Main.main([str(tmp_path)]) == Main.EXIT_CONFIG
    assert fake_session.calls == []


def test_empty_api_key_is_fatal(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv(API_KEY_ENV, "  ")
    assert Main.main([str(tmp_path)]) == Main.EXIT_CONFIG


def test_main_runs_with_empty_directory(tmp_path: Path, api_key, fake_session) -> None:
    root = tmp_path / "intake"
    root.mkdir()

    assert Main.main([str(root)]) == Main.EXIT_OK


def test_missing_directory_is_fatal(tmp_path: Path, api_key, fake_session) -> None:
    assert Main.main([str(tmp_path / "nope")]) == Main.EXIT_CONFIG


def test_no_argument_scans_current_directory(tmp_path: Path, monkeypatch, api_key, fake_session) -> None:
    (tmp_path / "Heat (1995).iso").write_bytes(b"iso")
    fake_session.add(OMDB_BASE_URL, FakeResponse(json_data={"Poster": POSTER_URL}))
    fake_session.add(POSTER_URL, FakeResponse(content=image_bytes((30, 40))))
    monkeypatch.chdir(tmp_path)

    assert Main.main([]) == Main.EXIT_OK
    assert (tmp_path / "Heat (1995).jpg").exists()


def test_relative_directory_is_resolved(tmp_path: Path, monkeypatch, api_key, fake_session) -> None:
    movies = tmp_path / "movies"
    movies.mkdir()
    (movies / "Heat (1995).iso").write_bytes(b"iso")
    fake_session.add(OMDB_BASE_URL, FakeResponse(json_data={"Poster": POSTER_URL}))
    fake_session.add(POSTER_URL, FakeResponse(content=image_bytes((30, 40))))
    monkeypatch.chdir(tmp_path)

    assert Main.main(["movies"]) == Main.EXIT_OK
    assert (movies / "Heat (1995).jpg").exists()


def test_scan_errors_give_nonzero_exit(tmp_path: Path, api_key, fake_session) -> None:
    (tmp_path / "Heat (1995).iso").write_bytes(b"iso")
    # No OMDb route: every lookup fails with a connection error

    assert Main.main([str(tmp_path)]) == Main.EXIT_ERRORS


def test_url_mode_writes_default_thumbnail(tmp_path: Path, monkeypatch, api_key, fake_session) -> None:
    fake_session.add(POSTER_URL, FakeResponse(content=image_bytes((800, 400))))
    monkeypatch.chdir(tmp_path)

    assert Main.main([POSTER_URL]) == Main.EXIT_OK
    with Image.open(tmp_path / "thumbnail.jpg") as img:
        assert img.size == (600, 600)


def test_url_mode_failure_is_fatal(tmp_path: Path, monkeypatch, api_key, fake_session) -> None:
    fake_session.add(POSTER_URL, FakeResponse(status_code=500))
    monkeypatch.chdir(tmp_path)

    assert Main.main([POSTER_URL]) == Main.EXIT_ERRORS
    assert not (tmp_path / "thumbnail.jpg").exists()


def test_url_mode_does_not_overwrite(tmp_path: Path, monkeypatch, api_key, fake_session) -> None:
    fake_session.add(POSTER_URL, FakeResponse(content=image_bytes((10, 10))))
    monkeypatch.chdir(tmp_path)
    (tmp_path / "thumbnail.jpg").write_bytes(b"stub")

    assert Main.main([POSTER_URL]) == Main.EXIT_ERRORS
    assert (tmp_path / "thumbnail.jpg").read_bytes() == b"stub"


def test_interactive_prompt(tmp_path: Path, monkeypatch, api_key, fake_session) -> None:
    (tmp_path / "Obscure (1971).iso").write_bytes(b"iso")
    fake_session.add(OMDB_BASE_URL, FakeResponse(json_data={"Poster": "N/A"}))
    fake_session.add(POSTER_URL, FakeResponse(content=image_bytes((30, 40))))
    monkeypatch.setattr("builtins.input", lambda prompt="": POSTER_URL)

    assert Main.main(["--interactive", str(tmp_path)]) == Main.EXIT_OK
    assert (tmp_path / "Obscure (1971).jpg").exists()


@pytest.mark.parametrize("value", ["0", "-1", "soon"])
def test_invalid_timeout_is_rejected(tmp_path: Path, api_key, fake_session, value) -> None:
    with pytest.raises(SystemExit) as exc:
        Main.main(["--timeout", value, str(tmp_path)])
    assert exc.value.code == 2
    assert fake_session.calls == []


def test_session_is_closed(tmp_path: Path, api_key, fake_session) -> None:
    assert Main.main([str(tmp_path)]) == Main.EXIT_OK
    assert fake_session.closed
