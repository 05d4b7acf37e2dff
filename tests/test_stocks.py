import asyncio
import json

import pytest

from rhmethods import HistoricalInterval, HistoricalSpan, endpoints
from rhmethods.urls import (
    FUNDAMENTALS,
    HISTORICALS,
    INSTRUMENTS,
    QUOTES,
    RATINGS,
    TAGS,
)


@pytest.mark.asyncio
async def test_get_ticker_fundamental(logged_in_client):
    client, server = logged_in_client
    method = endpoints.get_ticker_fundamental(client.session, "AAPL")
    task = asyncio.create_task(client.execute(method))

    request = await server.receive_request(timeout=pytest.TIMEOUT)
    assert request.method == "GET"
    assert request.headers["Authorization"] == f"Bearer {pytest.ACCESS_TOKEN}"
    assert request.headers["Accept"] == "application/json"
    assert request.path == f"{FUNDAMENTALS}AAPL/"
    assert request.query_string == ""
    server.send_response(
        request,
        content_type="application/json",
        text=json.dumps({"symbol": "AAPL", "pe_ratio": "30.0"}),
    )

    result = await asyncio.wait_for(task, pytest.TIMEOUT)
    assert result == {"symbol": "AAPL", "pe_ratio": "30.0"}


@pytest.mark.asyncio
async def test_get_fundamentals_by_symbols(logged_in_client):
    client, server = logged_in_client
    method = endpoints.get_fundamentals(client.session, symbols=["ABCD", "EFGH"])
    task = asyncio.create_task(client.execute(method))

    request = await server.receive_request(timeout=pytest.TIMEOUT)
    assert request.method == "GET"
    assert request.headers["Authorization"] == f"Bearer {pytest.ACCESS_TOKEN}"
    assert request.path == FUNDAMENTALS
    assert request.query["symbols"] == "ABCD,EFGH"
    server.send_response(
        request,
        content_type="application/json",
        text=json.dumps({"results": [{}, {}]}),
    )

    result = await asyncio.wait_for(task, pytest.TIMEOUT)
    assert result == [{}, {}]


@pytest.mark.asyncio
async def test_get_instruments_by_ids(logged_in_client):
    client, server = logged_in_client
    method = endpoints.get_instruments(client.session, ids=["12345"])
    task = asyncio.create_task(client.execute(method))

    request = await server.receive_request(timeout=pytest.TIMEOUT)
    assert request.method == "GET"
    assert request.path == INSTRUMENTS
    assert request.query["ids"] == "12345"
    server.send_response(
        request,
        content_type="application/json",
        text=json.dumps({"next": None, "results": [{"foo": "bar"}]}),
    )

    result = await asyncio.wait_for(task, pytest.TIMEOUT)
    assert result == [{"foo": "bar"}]


@pytest.mark.asyncio
async def test_get_quotes_by_instruments(logged_in_client):
    client, server = logged_in_client
    method = endpoints.get_quotes(client.session, instruments=["<>"])
    task = asyncio.create_task(client.execute(method))

    request = await server.receive_request(timeout=pytest.TIMEOUT)
    assert request.path == QUOTES
    assert request.query["instruments"] == "<>"
    server.send_response(
        request,
        content_type="application/json",
        text=json.dumps({"results": [{}]}),
    )

    result = await asyncio.wait_for(task, pytest.TIMEOUT)
    assert result == [{}]


@pytest.mark.asyncio
async def test_get_historical_quotes_by_symbols(logged_in_client):
    client, server = logged_in_client
    method = endpoints.get_historical_quotes(
        client.session,
        interval=HistoricalInterval.FIVE_MIN,
        span=HistoricalSpan.DAY,
        symbols=["ABCD"],
    )
    task = asyncio.create_task(client.execute(method))

    request = await server.receive_request(timeout=pytest.TIMEOUT)
    assert request.path == HISTORICALS
    assert request.query["bounds"] == "regular"
    assert request.query["interval"] == HistoricalInterval.FIVE_MIN.value
    assert request.query["span"] == HistoricalSpan.DAY.value
    assert request.query["symbols"] == "ABCD"
    server.send_response(
        request,
        content_type="application/json",
        text=json.dumps({"results": [{}]}),
    )

    result = await asyncio.wait_for(task, pytest.TIMEOUT)
    assert result == [{}]


@pytest.mark.asyncio
async def test_get_ratings(logged_in_client):
    client, server = logged_in_client
    method = endpoints.get_ratings(client.session, ids=["12345", "67890"])
    task = asyncio.create_task(client.execute(method))

    request = await server.receive_request(timeout=pytest.TIMEOUT)
    assert request.method == "GET"
    assert request.path == RATINGS
    assert request.query_string == "ids=12345,67890"
    server.send_response(
        request,
        content_type="application/json",
        text=json.dumps({"next": None, "results": [{"foo": "bar"}]}),
    )

    result = await asyncio.wait_for(task, pytest.TIMEOUT)
    assert result == [{"foo": "bar"}]


@pytest.mark.asyncio
async def test_get_ratings_logged_out(logged_out_client):
    client, server = logged_out_client
    method = endpoints.get_ratings(client.session, ids=["12345"])
    task = asyncio.create_task(client.execute(method))

    request = await server.receive_request(timeout=pytest.TIMEOUT)
    assert "Authorization" not in request.headers
    server.send_response(
        request,
        content_type="application/json",
        text=json.dumps({"next": None, "results": []}),
    )

    result = await asyncio.wait_for(task, pytest.TIMEOUT)
    assert result == []


@pytest.mark.asyncio
async def test_get_tags(logged_in_client):
    client, server = logged_in_client
    task = asyncio.create_task(
        client.execute(endpoints.get_tags(client.session, id_="12345"))
    )

    request = await server.receive_request(timeout=pytest.TIMEOUT)
    assert request.path == f"{TAGS}instrument/12345/"
    server.send_response(
        request,
        content_type="application/json",
        text=json.dumps({"tags": [{"slug": "foo"}]}),
    )

    result = await asyncio.wait_for(task, pytest.TIMEOUT)
    assert result == ["foo"]


@pytest.mark.asyncio
async def test_get_tags_escapes_id(logged_in_client):
    client, server = logged_in_client
    task = asyncio.create_task(
        client.execute(endpoints.get_tags(client.session, id_="a#b/c"))
    )

    request = await server.receive_request(timeout=pytest.TIMEOUT)
    assert request.raw_path == f"{TAGS}instrument/a%23b%2Fc/"
    assert request.query_string == ""
    server.send_response(
        request,
        content_type="application/json",
        text=json.dumps({"tags": []}),
    )

    result = await asyncio.wait_for(task, pytest.TIMEOUT)
    assert result == []


@pytest.mark.asyncio
async def test_get_tag_members(logged_in_client):
    client, server = logged_in_client
    task = asyncio.create_task(
        client.execute(endpoints.get_tag_members(client.session, tag="foo"))
    )

    request = await server.receive_request(timeout=pytest.TIMEOUT)
    assert request.path == f"{TAGS}tag/foo/"
    server.send_response(
        request,
        content_type="application/json",
        text=json.dumps({"instruments": ["<>"]}),
    )

    result = await asyncio.wait_for(task, pytest.TIMEOUT)
    assert result == ["<>"]
