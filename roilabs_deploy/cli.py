"""
Command-line entry points.

deploy-lp-lock, deploy-token-lock and deploy-roi-token take no flags; all
settings come from the environment (and ./.env). roilabs-deploy takes the
contract name as its only argument.
"""

import argparse
import os
import sys
from typing import Callable, List, Mapping, Optional

from dotenv import load_dotenv
from loguru import logger

from . import __version__
from .config import DeploymentConfig
from .contracts import CONTRACTS, get_contract_wrapper
from .exceptions import DeploymentError, OutcomeUnknownError
from .runner import DeploymentRunner, default_web3_factory

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<level>{message}</level>"
)


def configure_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper())


def run_deployment(
    contract_name: str,
    environ: Optional[Mapping[str, str]] = None,
    web3_factory: Callable = default_web3_factory,
) -> int:
    """
    Deploy one contract using settings from the environment.

    Args:
        contract_name: 'LPLock', 'TokenLock' or 'RoiToken'
        environ: Environment mapping (defaults to os.environ after loading .env)
        web3_factory: Web3 client factory handed to the runner

    Returns:
        Process exit code: 0 on success, 1 on any failure
    """
    if environ is None:
        load_dotenv(override=False)
        environ = os.environ

    try:
        configure_logging(environ.get("LOG_LEVEL") or "INFO")
    except ValueError:
        configure_logging("INFO")
        logger.warning(f"Unknown LOG_LEVEL {environ.get('LOG_LEVEL')!r}, using INFO")

    runner = None
    try:
        config = DeploymentConfig.from_env(environ)
        config.validate()
        spec = get_contract_wrapper(contract_name).for_config(config)
        runner = DeploymentRunner(config, spec, web3_factory=web3_factory)
        runner.run()
    except OutcomeUnknownError as e:
        logger.error(f"Outcome unknown: {e}")
        return 1
    except DeploymentError as e:
        logger.error(f"{type(e).__name__}: {e}")
        if e.tx_hash:
            logger.error(f"Transaction hash: {e.tx_hash}")
        return 1
    except KeyboardInterrupt:
        if runner is not None and runner.result is not None:
            logger.error(
                f"Interrupted; transaction {runner.result.tx_hash} may have been sent, "
                "check it manually before re-submitting"
            )
        else:
            logger.error("Interrupted before broadcast; nothing was sent")
        return 1
    except Exception as e:
        logger.exception(f"Deployment failed: {e}")
        return 1

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="roilabs-deploy",
        description="Deploy a RoiLabs contract using settings from the environment",
    )
    parser.add_argument("contract", choices=sorted(CONTRACTS.keys()))
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)
    return run_deployment(args.contract)


def deploy_lp_lock() -> None:
    sys.exit(run_deployment("LPLock"))


def deploy_token_lock() -> None:
    sys.exit(run_deployment("TokenLock"))


def deploy_roi_token() -> None:
    sys.exit(run_deployment("RoiToken"))


if __name__ == "__main__":
    sys.exit(main())
