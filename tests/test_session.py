import pickle

import pytest

from rhmethods import ClientUnauthenticatedError, MalformedURLError, Session


def test_bearer_token():
    assert Session(access_token="XYZ").bearer_token() == "XYZ"
    with pytest.raises(ClientUnauthenticatedError):
        Session().bearer_token()


def test_url():
    session = Session(base_url="https://api.example.com/")
    assert session.url("/fundamentals/", "AAPL") == (
        "https://api.example.com/fundamentals/AAPL/"
    )
    assert session.url("/midlands/tags/", "tag", "a/b?c#d") == (
        "https://api.example.com/midlands/tags/tag/a%2Fb%3Fc%23d/"
    )
    assert Session(base_url="").url("/fundamentals/") == "/fundamentals/"
    with pytest.raises(MalformedURLError):
        session.url("/watchlists/", "..")


def test_clear(session):
    session.clear()
    assert not session.authenticated
    assert session.refresh_token is None
    assert session.account_url is None
    assert session.account_num is None


def test_device_token_persisted(tmp_path):
    session_file = str(tmp_path / ".rhmethods.pickle")
    first = Session(session_file=session_file)
    second = Session(session_file=session_file)
    assert first.device_token == second.device_token

    without_file = Session()
    assert without_file.device_token != first.device_token


def test_dump_and_load(tmp_path):
    session_file = str(tmp_path / ".rhmethods.pickle")
    session = Session(
        access_token=pytest.ACCESS_TOKEN,
        refresh_token=pytest.REFRESH_TOKEN,
        session_file=session_file,
    )
    session.dump()

    with open(session_file, "rb") as f:
        data = pickle.load(f)
    assert data == {
        "device_token": session.device_token,
        "access_token": pytest.ACCESS_TOKEN,
        "refresh_token": pytest.REFRESH_TOKEN,
    }

    restored = Session(session_file=session_file)
    restored.load()
    assert restored.access_token == pytest.ACCESS_TOKEN
    assert restored.refresh_token == pytest.REFRESH_TOKEN


def test_dump_unauthenticated(tmp_path):
    session = Session(session_file=str(tmp_path / ".rhmethods.pickle"))
    with pytest.raises(ClientUnauthenticatedError):
        session.dump()


def test_dump_and_load_without_file(session):
    with pytest.raises(ValueError):
        session.dump()
    with pytest.raises(ValueError):
        session.load()
