"""
Test suite for bfhl_client.py, run against the server in-process
"""
import httpx
import pytest

from bfhl_client import ClientError, main, parse_input, select_fields, submit
from bfhl_server import app

URL = "http://testserver/bfhl"


def _transport():
    return httpx.ASGITransport(app=app)


def test_parse_input_valid():
    assert parse_input('{ "data": ["M","1"] }') == {"data": ["M", "1"]}

def test_parse_input_bad_json():
    with pytest.raises(ClientError, match="Invalid JSON format"):
        parse_input('{"data": [')

def test_parse_input_bad_shape():
    with pytest.raises(ClientError, match="Invalid input format"):
        parse_input('{"data": "not-an-array"}')

def test_select_fields():
    response = {"is_success": True, "user_id": "u", "numbers": ["1"],
                "alphabets": ["a"], "highest_alphabet": "a"}
    assert select_fields(response, []) == {"numbers": ["1"], "alphabets": ["a"],
                                           "highest_alphabet": "a"}
    assert select_fields(response, ["highest_alphabet"]) == {"highest_alphabet": "a"}

def test_select_fields_missing_highest():
    response = {"numbers": [], "alphabets": []}
    assert select_fields(response, ["highest_alphabet"]) == {}

@pytest.mark.asyncio
async def test_submit_round_trip():
    async with httpx.AsyncClient(transport=_transport()) as cli:
        data = await submit(cli, {"data": ["M", "1", "334", "4", "B"]}, URL)
    assert data["numbers"] == ["1", "334", "4"]
    assert data["highest_alphabet"] == "M"

@pytest.mark.asyncio
async def test_submit_server_rejects():
    async with httpx.AsyncClient(transport=_transport()) as cli:
        with pytest.raises(ClientError, match="400: Invalid input format"):
            await submit(cli, {"data": "oops"}, URL)

@pytest.mark.asyncio
async def test_main_prints_filtered(capsys):
    code = await main(['{"data": ["1", "b", "A"]}', "--url", URL, "--filter", "alphabets"],
                      transport=_transport())
    assert code == 0
    out = capsys.readouterr().out
    assert out.strip() == "alphabets: b,A"

@pytest.mark.asyncio
async def test_main_rejects_locally(capsys):
    code = await main(['{"data": [1, 2]}', "--url", URL], transport=_transport())
    assert code == 1
    assert "Invalid input format" in capsys.readouterr().err
