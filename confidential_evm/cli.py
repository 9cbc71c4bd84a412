"""
Confidential Token CLI
======================

Runs confidential deposits, transfers and withdrawals from a local keystore.

WHAT IT DOES:
    1. Keeps the signing key encrypted in .wallet.local.json (gitignored)
    2. Enables confidentiality for the account (registers its confidential key)
    3. Runs the requested operation and prints the explorer link

Confidential keys live in memory only, so every signing command enables
confidentiality again before running. Use `demo` to run the whole flow with
a single registration.

USAGE:
    confidential-evm [--keystore PATH] [--token ADDRESS] <command> [options]

COMMANDS:
    import-key  Encrypt PRIVATE_KEY (or a prompted key) into the keystore
    status      Address, public balance and fee (read-only, no password)
    balance     Confidential balance
    deposit     Public -> confidential       (--amount)
    transfer    Confidential -> recipient    (--amount --recipient)
    withdraw    Confidential -> public       (--amount)
    demo        enable, deposit, transfer, withdraw with balances in between

ENVIRONMENT:
    CONFIDENTIAL_CLIENT     Client class, e.g. "stabletrust.client:ConfidentialTransferClient"
    CONFIDENTIAL_RPC_URL    RPC endpoint (default: Stable testnet)
    CONFIDENTIAL_CHAIN_ID   Chain id (default: 2201)
    STABLE_TRUST_ADDRESS    Settlement contract; when set, the contract-address
                            protocol shape is used
    WALLET_PASSWORD         Keystore password (prompted when unset)

EXAMPLES:
    PRIVATE_KEY=0x... confidential-evm import-key
    confidential-evm status
    confidential-evm deposit --amount 1
    confidential-evm transfer --amount 0.5 --recipient 0xabc...
"""

import argparse
import asyncio
import getpass
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from confidential_evm.config import (
    ENV_STABLE_TRUST,
    STABLE_TESTNET_EXPLORER_URL,
    USDT0_DECIMALS,
    USDT0_TESTNET_ADDRESS,
    ConfidentialProtocolConfig,
    StableTrustConfig,
)
from confidential_evm.errors import ConfidentialError
from confidential_evm.protocol import ConfidentialProtocolEvm, StableTrustProtocolEvm
from confidential_evm.wallet import WalletStorage

# =============================================================================
# CONFIGURATION
# =============================================================================

EXPLORER_URL = os.getenv("CONFIDENTIAL_EXPLORER_URL", STABLE_TESTNET_EXPLORER_URL)


# =============================================================================
# HELPERS
# =============================================================================


def parse_units(value: str, decimals: int) -> int:
    """Convert a human amount ("0.5") to base units without floats."""
    text = value.strip()
    whole, _, frac = text.partition(".")
    if (
        not (whole or frac)
        or (whole and not whole.isdecimal())
        or (frac and not frac.isdecimal())
    ):
        raise ValueError(f"Not a non-negative decimal number: {value!r}")
    if len(frac) > decimals:
        raise ValueError(f"{value} has more than {decimals} decimal places")
    return int(whole or "0") * 10**decimals + int(frac.ljust(decimals, "0") or "0")


def format_units(amount: int, decimals: int) -> str:
    """Render base units as a decimal string."""
    if decimals == 0:
        return str(amount)
    whole, frac = divmod(amount, 10**decimals)
    return f"{whole}.{frac:0{decimals}d}"


def configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def load_config() -> StableTrustConfig | ConfidentialProtocolConfig:
    if os.getenv(ENV_STABLE_TRUST):
        return StableTrustConfig.from_env()
    return ConfidentialProtocolConfig.from_env()


def build_protocol(account, config):
    if isinstance(config, StableTrustConfig):
        return StableTrustProtocolEvm(account, config)
    return ConfidentialProtocolEvm(account, config)


def read_password(confirm: bool = False) -> str:
    password = os.getenv("WALLET_PASSWORD")
    if password:
        return password
    password = getpass.getpass("Keystore password: ")
    if confirm and getpass.getpass("Repeat password: ") != password:
        raise ValueError("Passwords do not match")
    return password


def print_banner(title: str) -> None:
    print("=" * 60)
    print(title)
    print("=" * 60)


def print_tx(tx_hash: str) -> None:
    print(f"  TX:   {tx_hash}")
    print(f"  View: {EXPLORER_URL}{tx_hash}")


async def unlock(args):
    """Decrypt the keystore and enable confidentiality."""
    config = load_config()
    account = WalletStorage(args.keystore).load_account(
        read_password(), provider=config.rpc_url
    )
    protocol = build_protocol(account, config)

    print(f"Enabling confidentiality for {account.address}...")
    await protocol.enable_confidentiality()
    return protocol


async def print_confidential_balance(protocol, args, label: str) -> None:
    result = await protocol.get_confidential_balance({"token": args.token})
    print(f"{label}: {format_units(result.amount, args.decimals)}")


# =============================================================================
# COMMANDS
# =============================================================================


def cmd_import_key(args) -> None:
    """Encrypt a private key into the keystore."""
    storage = WalletStorage(args.keystore)
    if storage.exists() and not args.force:
        print(f"Keystore already exists at {storage.path}")
        print(f"Address: {storage.address()}")
        print("\nUse --force to overwrite it.")
        return

    private_key = os.getenv("PRIVATE_KEY") or getpass.getpass("Private key (hex): ")
    address = storage.save(private_key.strip(), read_password(confirm=True))

    print_banner("KEYSTORE SAVED")
    print(f"\nAddress:  {address}")
    print(f"Saved to: {storage.path}")
    print("\nNEXT: confidential-evm status")


async def cmd_status(args) -> None:
    """Read-only account overview."""
    config = load_config()
    account = WalletStorage(args.keystore).load_read_only(provider=config.rpc_url)
    protocol = build_protocol(account, config)

    print_banner("ACCOUNT STATUS")
    print(f"\nAddress:  {account.address}")
    print(f"Chain:    {config.chain_id} ({config.rpc_url})")
    print(f"Token:    {args.token}")

    if isinstance(protocol, StableTrustProtocolEvm):
        balance = await protocol.get_public_balance({"token": args.token})
        fee = await protocol.get_fee()
        print(f"\nPublic balance: {format_units(balance, args.decimals)}")
        print(f"Fee:            {fee} (placeholder, not an estimate)")
    else:
        quote = await protocol.quote_transfer_confidential()
        print(f"\nTransfer quote: {quote} (placeholder, not an estimate)")


async def cmd_balance(args) -> None:
    protocol = await unlock(args)
    await print_confidential_balance(protocol, args, "Confidential balance")


async def cmd_deposit(args) -> None:
    amount = parse_units(args.amount, args.decimals)
    protocol = await unlock(args)

    print(f"\nDepositing {args.amount} into the confidential balance...")
    result = await protocol.deposit_confidential({"token": args.token, "amount": amount})
    print_tx(result.hash)


async def cmd_transfer(args) -> None:
    amount = parse_units(args.amount, args.decimals)
    protocol = await unlock(args)

    print(f"\nTransferring confidentially to {args.recipient}...")
    result = await protocol.transfer_confidential(
        {"recipient": args.recipient, "token": args.token, "amount": amount}
    )
    print("  Transfer amount is hidden on-chain.")
    print_tx(result.hash)


async def cmd_withdraw(args) -> None:
    amount = parse_units(args.amount, args.decimals)
    protocol = await unlock(args)

    print(f"\nWithdrawing {args.amount} to the public balance...")
    result = await protocol.withdraw_confidential({"token": args.token, "amount": amount})
    print_tx(result.hash)


async def cmd_demo(args) -> None:
    """Deposit, transfer and withdraw in one session."""
    amount = parse_units(args.amount, args.decimals)
    transfer_amount = amount // 2

    print_banner("CONFIDENTIAL DEMO")
    protocol = await unlock(args)
    print("  Enabled")

    print("\n--- 1. CONFIDENTIAL DEPOSIT ---")
    await print_confidential_balance(protocol, args, "Pre-deposit confidential balance")
    result = await protocol.deposit_confidential({"token": args.token, "amount": amount})
    print_tx(result.hash)
    await print_confidential_balance(protocol, args, "Post-deposit confidential balance")

    print("\n--- 2. CONFIDENTIAL TRANSFER ---")
    result = await protocol.transfer_confidential(
        {"recipient": args.recipient, "token": args.token, "amount": transfer_amount}
    )
    print("  Transfer amount is hidden on-chain.")
    print_tx(result.hash)
    await print_confidential_balance(protocol, args, "Post-transfer confidential balance")

    print("\n--- 3. WITHDRAW ---")
    result = await protocol.withdraw_confidential(
        {"token": args.token, "amount": amount - transfer_amount}
    )
    print_tx(result.hash)
    await print_confidential_balance(protocol, args, "Post-withdraw confidential balance")

    print()
    print_banner("DEMO COMPLETE")


COMMANDS = {
    "status": cmd_status,
    "balance": cmd_balance,
    "deposit": cmd_deposit,
    "transfer": cmd_transfer,
    "withdraw": cmd_withdraw,
    "demo": cmd_demo,
}


# =============================================================================
# MAIN
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="confidential-evm", description="Confidential token operations"
    )
    parser.add_argument("--keystore", type=Path, default=Path(".wallet.local.json"))
    parser.add_argument("--token", default=USDT0_TESTNET_ADDRESS, help="Token address")
    parser.add_argument(
        "--decimals", type=int, default=USDT0_DECIMALS, help="Token decimals"
    )
    parser.add_argument("-v", "--verbose", action="store_true")

    sub = parser.add_subparsers(dest="command", required=True)

    import_key = sub.add_parser("import-key", help="Encrypt a private key into the keystore")
    import_key.add_argument("--force", action="store_true", help="Overwrite keystore")

    sub.add_parser("status", help="Address, public balance and fee")
    sub.add_parser("balance", help="Confidential balance")

    for name in ("deposit", "withdraw"):
        p = sub.add_parser(name, help=f"Confidential {name}")
        p.add_argument("-a", "--amount", required=True, help="Amount in token units")

    transfer = sub.add_parser("transfer", help="Confidential transfer")
    transfer.add_argument("-a", "--amount", required=True, help="Amount in token units")
    transfer.add_argument("-r", "--recipient", required=True, help="Recipient address")

    demo = sub.add_parser("demo", help="Full confidential flow")
    demo.add_argument("-a", "--amount", default="1", help="Deposit amount in token units")
    demo.add_argument("-r", "--recipient", required=True, help="Recipient address")

    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        if args.command == "import-key":
            cmd_import_key(args)
        else:
            asyncio.run(COMMANDS[args.command](args))
    except (ConfidentialError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
