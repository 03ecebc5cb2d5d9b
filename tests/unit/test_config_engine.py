import pytest

from solana_fanout.domain.services.config_engine import (
    WalletConfigError,
    load_wallet_config,
    parse_wallet_config,
)


def test_pairs_follow_positional_order(wallet_file):
    path = wallet_file(["s1", "s2"], ["r1", "r2"])

    config = load_wallet_config(path)

    assert config.pairs() == [("s1", "r1"), ("s2", "r2")]


def test_unequal_lists_pair_up_to_the_shorter(wallet_file):
    config = load_wallet_config(wallet_file(["s1", "s2", "s3"], ["r1", "r2"]))
    assert config.pairs() == [("s1", "r1"), ("s2", "r2")]

    config = load_wallet_config(wallet_file(["s1"], ["r1", "r2", "r3"]))
    assert config.pairs() == [("s1", "r1")]


def test_empty_lists_are_allowed():
    config = parse_wallet_config({"sender_wallets": None, "recipient_wallets": []})
    assert config.pairs() == []


def test_missing_file(tmp_path):
    with pytest.raises(WalletConfigError, match="not found"):
        load_wallet_config(tmp_path / "missing.yml")


def test_invalid_yaml(tmp_path):
    path = tmp_path / "wallets.yml"
    path.write_text("sender_wallets: [unterminated\n")

    with pytest.raises(WalletConfigError, match="Failed to parse config"):
        load_wallet_config(path)


@pytest.mark.parametrize(
    "data,message",
    [
        (["not", "a", "mapping"], "mapping"),
        ({"recipient_wallets": []}, "sender_wallets"),
        ({"sender_wallets": []}, "recipient_wallets"),
        ({"sender_wallets": "abc", "recipient_wallets": []}, "must be a list"),
        ({"sender_wallets": [1], "recipient_wallets": []}, r"sender_wallets\[0\]"),
    ],
)
def test_malformed_documents(data, message):
    with pytest.raises(WalletConfigError, match=message):
        parse_wallet_config(data)


def test_entries_are_kept_verbatim():
    config = parse_wallet_config({"sender_wallets": [" s1 "], "recipient_wallets": ["r1\n"]})
    assert config.pairs() == [(" s1 ", "r1\n")]
