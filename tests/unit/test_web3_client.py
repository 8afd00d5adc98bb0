"""
Unit tests for the web3 contract client.

No network access: AsyncWeb3 and the signing account are replaced by mocks.
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from eth_account import Account
from web3.exceptions import ContractLogicError, Web3Exception

from zkcall.blockchain import (
    ArtifactNotFoundError,
    ContractClientError,
    NotConnectedError,
    TransactionRevertedError,
    load_artifact,
)
from zkcall.blockchain.web3_client import Web3ContractClient, normalize_args
from zkcall.config import NetworkSettings
from zkcall.zk import encode_calldata


VERIFY_PROOF_ABI = {
    "type": "function",
    "name": "verifyProof",
    "stateMutability": "view",
    "inputs": [
        {"internalType": "uint256[2]", "name": "_pA", "type": "uint256[2]"},
        {"internalType": "uint256[2][2]", "name": "_pB", "type": "uint256[2][2]"},
        {"internalType": "uint256[2]", "name": "_pC", "type": "uint256[2]"},
        {"internalType": "uint256[2]", "name": "_pubSignals", "type": "uint256[2]"},
    ],
    "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
}

VERIFIER_ADDRESS = "0x74b5c544917d4603ae983a25a1da0b8712d3af1e"


@pytest.fixture
def artifacts_dir(tmp_path):
    """Hardhat-style artifacts tree with a Groth16Verifier."""
    contract_dir = tmp_path / "contracts" / "verifier.sol"
    contract_dir.mkdir(parents=True)
    (contract_dir / "Groth16Verifier.json").write_text(json.dumps({
        "contractName": "Groth16Verifier",
        "abi": [VERIFY_PROOF_ABI],
        "bytecode": "0x6080604052",
    }))
    (contract_dir / "Groth16Verifier.dbg.json").write_text(json.dumps({"buildInfo": "x"}))
    return tmp_path


@pytest.fixture
def fake_w3():
    """AsyncWeb3 stand-in with awaitable eth methods."""
    w3 = MagicMock()
    w3.eth.get_transaction_count = AsyncMock(return_value=7)
    w3.eth.send_raw_transaction = AsyncMock(return_value=b"\x12" * 32)
    w3.eth.wait_for_transaction_receipt = AsyncMock(return_value={
        "status": 1,
        "blockNumber": 4242,
        "gasUsed": 250000,
        "contractAddress": "0x" + "ab" * 20,
    })
    return w3


@pytest.fixture
def client(artifacts_dir, fake_w3):
    """Client wired to the fake web3 with a fake signing account."""
    network = NetworkSettings(
        mode="rpc",
        rpc_url="http://127.0.0.1:8545",
        private_key="0x" + "11" * 32,
        chain_id=11155111,
    )
    client = Web3ContractClient(network, artifacts_dir, w3=fake_w3)
    client._account = MagicMock(address="0x" + "cd" * 20)
    client._account.sign_transaction.return_value = MagicMock(raw_transaction=b"\x01\x02")
    return client


async def _awaitable(value):
    if isinstance(value, Exception):
        raise value
    return value


def _function_builder(fake_w3, build_result=None, side_effect=None):
    builder = MagicMock()
    builder.build_transaction = AsyncMock(return_value=build_result or {}, side_effect=side_effect)
    factory = MagicMock(return_value=builder)
    contract = MagicMock()
    contract.functions.__getitem__.return_value = factory
    fake_w3.eth.contract.return_value = contract
    return factory, builder


class TestArtifacts:
    """Tests for load_artifact."""

    def test_load_hardhat_artifact(self, artifacts_dir):
        artifact = load_artifact(artifacts_dir, "Groth16Verifier")

        assert artifact.contract_name == "Groth16Verifier"
        assert artifact.bytecode == "0x6080604052"
        assert artifact.function_abi("verifyProof", 4)["name"] == "verifyProof"
        assert artifact.source_path.name == "Groth16Verifier.json"

    def test_load_foundry_artifact(self, tmp_path):
        out_dir = tmp_path / "out" / "Verifier.sol"
        out_dir.mkdir(parents=True)
        (out_dir / "ECDSAGroth16Verifier.json").write_text(json.dumps({
            "abi": [VERIFY_PROOF_ABI],
            "bytecode": {"object": "6080"},
        }))

        artifact = load_artifact(tmp_path, "ECDSAGroth16Verifier")

        assert artifact.contract_name == "ECDSAGroth16Verifier"
        assert artifact.bytecode == "0x6080"

    def test_missing_artifact(self, tmp_path):
        with pytest.raises(ArtifactNotFoundError) as exc_info:
            load_artifact(tmp_path, "Groth16Verifier")

        assert exc_info.value.contract_name == "Groth16Verifier"

    def test_unknown_function(self, artifacts_dir):
        artifact = load_artifact(artifacts_dir, "Groth16Verifier")

        with pytest.raises(ContractClientError, match="no function verify"):
            artifact.function_abi("verify")

        with pytest.raises(ContractClientError, match="taking 3 arguments"):
            artifact.function_abi("verifyProof", 3)


class TestNormalizeArgs:
    """Hex calldata to web3 integer arguments."""

    def test_calldata_to_ints(self):
        calldata = encode_calldata(
            {"pi_a": ["10", "20"], "pi_b": [["1", "2"], ["3", "4"]], "pi_c": ["5", "6"]},
            ["7", "8"],
        )

        args = normalize_args(VERIFY_PROOF_ABI, calldata.as_args())

        assert args == [[10, 20], [[2, 1], [4, 3]], [5, 6], [7, 8]]

    def test_large_values_preserved(self):
        value = 2**253 + 99
        args = normalize_args(
            {"name": "f", "inputs": [{"type": "uint256[]"}]},
            [[hex(value)]],
        )

        assert args == [[value]]

    def test_non_integer_types_untouched(self):
        args = normalize_args(
            {"name": "f", "inputs": [{"type": "address"}, {"type": "bytes32"}, {"type": "int64"}]},
            ["0x" + "ab" * 20, "0x" + "00" * 32, "-5"],
        )

        assert args == ["0x" + "ab" * 20, "0x" + "00" * 32, -5]

    def test_argument_count_mismatch(self):
        with pytest.raises(ContractClientError, match="takes 4 arguments, got 3"):
            normalize_args(VERIFY_PROOF_ABI, [[], [], []])

    def test_unparseable_integer(self):
        with pytest.raises(ContractClientError, match="uint256"):
            normalize_args({"name": "f", "inputs": [{"type": "uint256"}]}, ["zz"])


class TestWeb3ContractClient:
    """Tests for Web3ContractClient with a mocked AsyncWeb3."""

    @pytest.mark.asyncio
    async def test_connect_requires_rpc_url(self, artifacts_dir):
        client = Web3ContractClient(NetworkSettings(mode="rpc", rpc_url=""), artifacts_dir)

        with pytest.raises(NotConnectedError, match="No RPC URL"):
            await client.connect()

    @pytest.mark.asyncio
    async def test_connect_requires_signer(self, artifacts_dir, fake_w3):
        fake_w3.is_connected = AsyncMock(return_value=True)
        network = NetworkSettings(mode="rpc", rpc_url="http://127.0.0.1:8545", private_key="")
        client = Web3ContractClient(network, artifacts_dir, w3=fake_w3)

        with pytest.raises(NotConnectedError, match="signing key"):
            await client.connect()

    @pytest.mark.asyncio
    async def test_connect_unreachable(self, artifacts_dir, fake_w3):
        fake_w3.is_connected = AsyncMock(return_value=False)
        network = NetworkSettings(mode="rpc", rpc_url="http://127.0.0.1:8545")
        client = Web3ContractClient(network, artifacts_dir, w3=fake_w3)

        with pytest.raises(NotConnectedError, match="Cannot reach"):
            await client.connect()

    def test_w3_before_connect(self, artifacts_dir):
        client = Web3ContractClient(NetworkSettings(mode="rpc"), artifacts_dir)

        with pytest.raises(NotConnectedError):
            client.w3

    @pytest.mark.asyncio
    async def test_connect_loads_account(self, artifacts_dir, fake_w3):
        fake_w3.is_connected = AsyncMock(return_value=True)
        fake_w3.eth.account = Account
        key = "0x" + "11" * 32
        network = NetworkSettings(mode="rpc", rpc_url="http://127.0.0.1:8545", private_key=key, chain_id=31337)
        client = Web3ContractClient(network, artifacts_dir, w3=fake_w3)

        await client.connect()

        assert client._account.address == Account.from_key(key).address

    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", ["not-a-key", "0x1234"])
    async def test_connect_invalid_signing_key(self, artifacts_dir, fake_w3, key):
        fake_w3.is_connected = AsyncMock(return_value=True)
        fake_w3.eth.account = Account
        network = NetworkSettings(mode="rpc", rpc_url="http://127.0.0.1:8545", private_key=key)
        client = Web3ContractClient(network, artifacts_dir, w3=fake_w3)

        with pytest.raises(NotConnectedError, match="not a valid") as exc_info:
            await client.connect()

        assert key not in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_disconnect_closes_provider(self, client, fake_w3):
        fake_w3.provider.disconnect = AsyncMock()

        await client.disconnect()

        fake_w3.provider.disconnect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_health_check_healthy(self, client, fake_w3):
        fake_w3.eth.block_number = _awaitable(4242)

        health = await client.health_check()

        assert health["status"] == "healthy"
        assert health["mode"] == "rpc"
        assert health["chain_id"] == 11155111
        assert health["block_number"] == 4242

    @pytest.mark.asyncio
    async def test_health_check_rpc_failure(self, client, fake_w3):
        fake_w3.eth.block_number = _awaitable(Web3Exception("connection refused"))

        health = await client.health_check()

        assert health["status"] == "unhealthy"
        assert "connection refused" in health["error"]

    @pytest.mark.asyncio
    async def test_health_check_not_connected(self, artifacts_dir):
        client = Web3ContractClient(NetworkSettings(mode="rpc"), artifacts_dir)

        health = await client.health_check()

        assert health["status"] == "unhealthy"
        assert health["network"] == "sepolia"

    @pytest.mark.asyncio
    async def test_call_invalid_address(self, client, fake_w3):
        _function_builder(fake_w3)

        with pytest.raises(ContractClientError, match="Invalid contract address '0x1234'"):
            await client.call("Groth16Verifier", "0x1234", "verifyProof", [[0, 0], [[0, 0], [0, 0]], [0, 0], [0, 0]])

        fake_w3.eth.send_raw_transaction.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_call_verify_proof(self, client, fake_w3):
        factory, builder = _function_builder(fake_w3, build_result={"data": "0x"})
        calldata = encode_calldata(
            {"pi_a": ["10", "20"], "pi_b": [["1", "2"], ["3", "4"]], "pi_c": ["5", "6"]},
            ["7", "8"],
        )

        confirmation = await client.call(
            "Groth16Verifier", VERIFIER_ADDRESS, "verifyProof", calldata.as_args()
        )

        factory.assert_called_once_with([10, 20], [[2, 1], [4, 3]], [5, 6], [7, 8])
        params = builder.build_transaction.await_args.args[0]
        assert params["chainId"] == 11155111
        assert params["nonce"] == 7
        assert "gas" not in params

        fake_w3.eth.send_raw_transaction.assert_awaited_once_with(b"\x01\x02")
        assert confirmation.tx_hash == "0x" + "12" * 32
        assert confirmation.block_number == 4242
        assert confirmation.gas_used == 250000
        assert confirmation.succeeded

    @pytest.mark.asyncio
    async def test_call_uses_checksum_address(self, client, fake_w3):
        _function_builder(fake_w3)

        await client.call("Groth16Verifier", VERIFIER_ADDRESS, "verifyProof", [[0, 0], [[0, 0], [0, 0]], [0, 0], [0, 0]])

        address = fake_w3.eth.contract.call_args.kwargs["address"]
        assert address.lower() == VERIFIER_ADDRESS
        assert address != VERIFIER_ADDRESS

    @pytest.mark.asyncio
    async def test_configured_gas_limit(self, client, fake_w3):
        _, builder = _function_builder(fake_w3)
        client.network.gas_limit = 500000

        await client.call("Groth16Verifier", VERIFIER_ADDRESS, "verifyProof", [[0, 0], [[0, 0], [0, 0]], [0, 0], [0, 0]])

        assert builder.build_transaction.await_args.args[0]["gas"] == 500000

    @pytest.mark.asyncio
    async def test_reverted_receipt(self, client, fake_w3):
        _function_builder(fake_w3)
        fake_w3.eth.wait_for_transaction_receipt.return_value = {"status": 0, "blockNumber": 1}

        with pytest.raises(TransactionRevertedError) as exc_info:
            await client.call("Groth16Verifier", VERIFIER_ADDRESS, "verifyProof", [[0, 0], [[0, 0], [0, 0]], [0, 0], [0, 0]])

        assert exc_info.value.method == "Groth16Verifier.verifyProof"
        assert exc_info.value.tx_hash == "0x" + "12" * 32

    @pytest.mark.asyncio
    async def test_revert_during_estimation(self, client, fake_w3):
        _function_builder(fake_w3, side_effect=ContractLogicError("execution reverted"))

        with pytest.raises(ContractClientError, match="would revert"):
            await client.call("Groth16Verifier", VERIFIER_ADDRESS, "verifyProof", [[0, 0], [[0, 0], [0, 0]], [0, 0], [0, 0]])

        fake_w3.eth.send_raw_transaction.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_deploy(self, client, fake_w3):
        builder = MagicMock()
        builder.build_transaction = AsyncMock(return_value={"data": "0x6080604052"})
        factory = MagicMock()
        factory.constructor.return_value = builder
        fake_w3.eth.contract.return_value = factory

        receipt = await client.deploy("Groth16Verifier")

        fake_w3.eth.contract.assert_called_once_with(abi=[VERIFY_PROOF_ABI], bytecode="0x6080604052")
        assert receipt.contract_name == "Groth16Verifier"
        assert receipt.address == "0x" + "ab" * 20
        assert receipt.block_number == 4242

    @pytest.mark.asyncio
    async def test_deploy_missing_artifact(self, client):
        with pytest.raises(ArtifactNotFoundError):
            await client.deploy("MissingVerifier")
