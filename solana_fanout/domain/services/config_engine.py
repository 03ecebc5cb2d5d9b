"""
CONFIG ENGINE
Load and validate the wallet batch file

RESPONSIBILITIES:
- Load the YAML wallet document
- Validate its shape
- Expose sender/recipient pairs

RULES:
- Fail fast on invalid config
- Never log secret keys
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Tuple

import yaml


class WalletConfigError(ValueError):
    """Raised when the wallet file is missing or malformed."""


@dataclass(frozen=True)
class WalletConfig:
    sender_wallets: List[str]
    recipient_wallets: List[str]

    def pairs(self) -> List[Tuple[str, str]]:
        """Positional pairs; stops at the end of the shorter list."""
        return list(zip(self.sender_wallets, self.recipient_wallets))


def _string_list(data: dict, key: str) -> List[str]:
    if key not in data:
        raise WalletConfigError(f"Missing '{key}' in wallet config")
    values = data[key]
    if values is None:
        return []
    if not isinstance(values, list):
        raise WalletConfigError(f"'{key}' must be a list")
    for index, value in enumerate(values):
        if not isinstance(value, str):
            raise WalletConfigError(f"'{key}[{index}]' must be a string")
    return list(values)


def parse_wallet_config(data: Any) -> WalletConfig:
    if not isinstance(data, dict):
        raise WalletConfigError("Wallet config must be a mapping")
    return WalletConfig(
        sender_wallets=_string_list(data, "sender_wallets"),
        recipient_wallets=_string_list(data, "recipient_wallets"),
    )


def load_wallet_config(path: Path) -> WalletConfig:
    """Load wallets.yml"""
    path = Path(path)
    if not path.exists():
        raise WalletConfigError(f"Unable to read config file: {path} not found")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise WalletConfigError(f"Unable to read config file: {exc}") from exc
    except yaml.YAMLError as exc:
        raise WalletConfigError(f"Failed to parse config: {exc}") from exc
    return parse_wallet_config(data)
