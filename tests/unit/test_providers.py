# PATH: tests/unit/test_providers.py
"""
Unit tests for the JSON-RPC provider.

Uses httpx.MockTransport; no network access.
"""

import json

import httpx
import pytest

from chains.providers import RPCProvider
from core.constants import ErrorCode
from core.exceptions import RPCError, RPCTimeoutError


def _provider(handler) -> RPCProvider:
    return RPCProvider("home", "http://home.invalid/rpc", transport=httpx.MockTransport(handler))


def _result(value):
    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "result": value})
    return handler


class TestCall:

    @pytest.mark.asyncio
    async def test_success_returns_result(self):
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return _result("0xa86a")(request)

        provider = _provider(handler)
        try:
            assert await provider.get_chain_id() == 43114
        finally:
            await provider.close()

        assert seen[0]["method"] == "eth_chainId"
        assert seen[0]["jsonrpc"] == "2.0"
        assert provider.stats.successful_requests == 1

    @pytest.mark.asyncio
    async def test_request_ids_increase(self):
        ids = []

        def handler(request):
            ids.append(json.loads(request.content)["id"])
            return _result("0x1")(request)

        provider = _provider(handler)
        await provider.get_gas_price()
        await provider.get_gas_price()
        await provider.close()

        assert ids == [1, 2]

    @pytest.mark.asyncio
    async def test_json_rpc_error_raises(self):
        def handler(request):
            return httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32000, "message": "execution reverted"}},
            )

        provider = _provider(handler)
        with pytest.raises(RPCError) as exc_info:
            await provider.estimate_gas({"from": "0x" + "11" * 20, "to": "0x" + "22" * 20, "data": "0x"})
        await provider.close()

        assert "execution reverted" in str(exc_info.value)
        assert exc_info.value.code == ErrorCode.INFRA_RPC_ERROR
        assert provider.stats.failed_requests == 1
        assert provider.stats.last_error == "execution reverted"

    @pytest.mark.asyncio
    async def test_http_error_raises(self):
        provider = _provider(lambda request: httpx.Response(502, text="bad gateway"))
        with pytest.raises(RPCError):
            await provider.get_balance("0x" + "11" * 20)
        await provider.close()

    @pytest.mark.asyncio
    async def test_timeout_raises(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        provider = _provider(handler)
        with pytest.raises(RPCTimeoutError) as exc_info:
            await provider.get_balance("0x" + "11" * 20)
        await provider.close()

        assert exc_info.value.code == ErrorCode.INFRA_TIMEOUT
        assert exc_info.value.details["network"] == "home"

    @pytest.mark.asyncio
    async def test_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500)

        provider = _provider(handler)
        with pytest.raises(RPCError):
            await provider.get_gas_price()
        await provider.close()

        assert len(calls) == 1


class TestMethods:

    @pytest.mark.asyncio
    async def test_estimate_gas_hex_value(self):
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return _result("0x5208")(request)

        provider = _provider(handler)
        gas = await provider.estimate_gas({"from": "0xa", "to": "0xb", "data": "0x", "value": 10**15})
        await provider.close()

        assert gas == 21000
        assert seen[0]["params"][0]["value"] == hex(10**15)

    @pytest.mark.asyncio
    async def test_receipt_pending(self):
        provider = _provider(_result(None))
        assert await provider.get_transaction_receipt("0xabc") is None
        await provider.close()

    @pytest.mark.asyncio
    async def test_receipt_decoded(self):
        provider = _provider(_result({
            "transactionHash": "0xabc",
            "status": "0x1",
            "blockNumber": "0x10",
            "gasUsed": "0x3d090",
            "effectiveGasPrice": "0x5d21dba00",
        }))
        receipt = await provider.get_transaction_receipt("0xabc")
        await provider.close()

        assert receipt == {
            "transaction_hash": "0xabc",
            "status": 1,
            "block_number": 16,
            "gas_used": 250000,
            "effective_gas_price": 25_000_000_000,
        }

    @pytest.mark.asyncio
    async def test_stats_summary(self):
        provider = _provider(_result("0x1"))
        await provider.get_gas_price()
        await provider.close()

        summary = provider.get_stats_summary()
        assert summary["network"] == "home"
        assert summary["total_requests"] == 1
        assert summary["success_rate"] == 1.0
        assert summary["last_error"] is None
