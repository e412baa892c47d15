"""Unit tests for the contract wrappers."""

import pytest

from roilabs_deploy.contracts import (
    CONTRACTS,
    LPLockContract,
    RoiTokenContract,
    TokenLockContract,
    get_contract_wrapper,
)
from roilabs_deploy.contracts.base import is_valid_address
from roilabs_deploy.exceptions import (
    ConfigurationError,
    ConstructorArgumentError,
    UnknownContractError,
)
from roilabs_deploy.types import ContractSpec

USDC = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"
WALLET = "0x1111111111111111111111111111111111111111"
ROUTER = "0x4752ba5DBc23f44D87826276BF6Fd6b1C372aD24"


class TestLPLockContract:
    def test_encodes_checksummed_params(self):
        params = LPLockContract().encode_constructor_params(USDC.lower(), WALLET)
        assert params == {"_usdc": USDC, "_feeWallet": WALLET}

    def test_contract_spec_keeps_argument_order(self):
        spec = LPLockContract().contract_spec(USDC, WALLET)
        assert spec == ContractSpec("LPLock", [USDC, WALLET])

    def test_missing_prefix(self):
        with pytest.raises(ConstructorArgumentError, match="must start with 0x"):
            LPLockContract().encode_constructor_params(USDC[2:], WALLET)

    def test_wrong_length(self):
        with pytest.raises(ConstructorArgumentError, match="42 characters"):
            LPLockContract().encode_constructor_params(USDC, WALLET + "11")

    def test_empty_address(self):
        with pytest.raises(ConstructorArgumentError, match="USDC address is required"):
            LPLockContract().encode_constructor_params("", WALLET)

    def test_zero_address(self):
        with pytest.raises(ConstructorArgumentError, match="zero address"):
            LPLockContract().encode_constructor_params(USDC, "0x" + "0" * 40)

    def test_bad_checksum(self):
        bad = USDC[:2] + USDC[2:].swapcase()
        with pytest.raises(ConstructorArgumentError, match="Invalid USDC address"):
            LPLockContract().encode_constructor_params(bad, WALLET)

    def test_fee_wallet_cannot_be_usdc(self):
        with pytest.raises(ConstructorArgumentError, match="fee wallet"):
            LPLockContract().encode_constructor_params(USDC, USDC.lower())

    def test_for_config(self, config):
        spec = LPLockContract.for_config(config)
        assert spec.name == "LPLock"
        assert len(spec.constructor_args) == 2

    def test_for_config_names_missing_variable(self, base_env):
        from roilabs_deploy.config import DeploymentConfig

        del base_env["PLATFORM_FEE_WALLET"]
        config = DeploymentConfig.from_env(base_env)

        with pytest.raises(ConfigurationError, match="PLATFORM_FEE_WALLET"):
            LPLockContract.for_config(config)


class TestTokenLockContract:
    def test_takes_no_arguments(self, config):
        assert TokenLockContract.for_config(config) == ContractSpec("TokenLock", [])

    def test_rejects_arguments(self):
        with pytest.raises(TypeError):
            TokenLockContract().encode_constructor_params(USDC)


class TestRoiTokenContract:
    def test_encodes_router(self):
        assert RoiTokenContract().encode_constructor_params(ROUTER.lower()) == {"_router": ROUTER}

    def test_for_config(self, config):
        assert RoiTokenContract.for_config(config) == ContractSpec("RoiToken", [ROUTER])

    def test_invalid_router(self):
        with pytest.raises(ConstructorArgumentError, match="Router address"):
            RoiTokenContract().encode_constructor_params("0x1234")


class TestRegistry:
    def test_every_known_contract_has_a_wrapper(self):
        assert set(CONTRACTS) == {"LPLock", "TokenLock", "RoiToken"}

    def test_lookup(self):
        assert get_contract_wrapper("RoiToken") is RoiTokenContract

    def test_unknown(self):
        with pytest.raises(UnknownContractError, match="Available contracts"):
            get_contract_wrapper("Vesting")


class TestIsValidAddress:
    @pytest.mark.parametrize("value", [USDC, USDC.lower(), "0x" + USDC[2:].upper(), WALLET])
    def test_accepts(self, value):
        assert is_valid_address(value)

    @pytest.mark.parametrize(
        "value",
        [USDC[:2] + USDC[2:].swapcase(), USDC[:-2], "0x" + "g" * 40],
    )
    def test_rejects(self, value):
        assert not is_valid_address(value)
