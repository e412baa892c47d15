"""Integration tests deploying against an in-process chain (eth-tester)."""

import pytest

pytest.importorskip("eth_tester")

from eth_account import Account
from web3 import EthereumTesterProvider, Web3

from roilabs_deploy.config import DeploymentConfig
from roilabs_deploy.contracts import LPLockContract, TokenLockContract
from roilabs_deploy.manifest import get_manifest_path, load_manifest
from roilabs_deploy.runner import DeploymentRunner
from roilabs_deploy.types import DeploymentStatus

USDC = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"
WALLET = "0x1111111111111111111111111111111111111111"


@pytest.fixture
def w3():
    return Web3(EthereumTesterProvider())


@pytest.fixture
def deployer(w3):
    """Fresh key funded from the tester's pre-funded account."""
    account = Account.create()
    tx_hash = w3.eth.send_transaction(
        {"from": w3.eth.accounts[0], "to": account.address, "value": Web3.to_wei(10, "ether")}
    )
    w3.eth.wait_for_transaction_receipt(tx_hash)
    return account


@pytest.fixture
def tester_config(deployer, artifacts_dir, deployments_dir):
    return DeploymentConfig(
        rpc_url="http://127.0.0.1:8545",
        private_key=deployer.key.hex(),
        network="tester",
        chain_id=None,
        confirmation_timeout=30,
        poll_latency=0.1,
        artifacts_dir=artifacts_dir,
        deployments_dir=deployments_dir,
    )


def run(config, spec, w3):
    return DeploymentRunner(config, spec, web3_factory=lambda _: w3).run()


class TestDeployOnTester:
    def test_lp_lock_deploys(self, w3, tester_config, deployer):
        spec = LPLockContract().contract_spec(USDC, WALLET)

        result = run(tester_config, spec, w3)

        assert result.status is DeploymentStatus.CONFIRMED
        assert len(result.tx_hash) == 66
        assert len(result.contract_address) == 42
        assert result.deployer == deployer.address
        receipt = w3.eth.get_transaction_receipt(result.tx_hash)
        assert receipt["contractAddress"] == result.contract_address

    def test_each_deployment_gets_a_new_address(self, w3, tester_config):
        spec = TokenLockContract().contract_spec()

        first = run(tester_config, spec, w3)
        second = run(tester_config, spec, w3)

        assert first.contract_address != second.contract_address
        assert w3.eth.get_transaction_count(first.deployer) == 2

    def test_manifest_records_confirmed_deployment(self, w3, tester_config, deployments_dir):
        spec = TokenLockContract().contract_spec()
        result = run(tester_config, spec, w3)

        manifest = load_manifest(get_manifest_path(deployments_dir, "tester", "TokenLock"))
        assert manifest["latest"]["address"] == result.contract_address
        assert manifest["latest"]["block"] == result.block_number
