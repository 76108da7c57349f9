"""Command line interface for synth-release-tools."""

import json
import logging
from pathlib import Path

import click
from dotenv import load_dotenv

from .constants import LOCAL_NETWORKS
from .multisend import build_batch
from .proposals import MultisigBatchQueue, propose_queued_batch, propose_transaction
from .releases import create_release
from .safe import DelegateSigner
from .service import SafeServiceClient, get_network_config
from .versions import is_release_version


def _validate_release(ctx, param, value):
    if not is_release_version(value):
        raise click.BadParameter(f"'{value}' is not a semantic version, i.e 1.2.3")
    return value


network_option = click.option(
    "--network",
    "-n",
    help="Network name",
    envvar="NETWORK",
    default="hardhat",
    show_default=True,
    show_envvar=True,
)

safe_address_option = click.option(
    "--safe-address",
    help="Safe multisig address",
    envvar="SAFE_ADDRESS",
    show_envvar=True,
    required=True,
)

queue_file_option = click.option(
    "--queue-file",
    help="Pending multisig batch file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
)


def _proposal_components(network: str):
    if network in LOCAL_NETWORKS:
        raise click.UsageError(f"Multisig proposals are not supported on local network '{network}'")
    config = get_network_config(network)
    signer = DelegateSigner.from_env(config["chain_id"])
    client = SafeServiceClient.for_network(network)
    return signer, client, config["multisend_address"]


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """Release and multisig tooling for the synth protocol deployments."""
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@cli.command("create-release")
@click.option(
    "--release",
    "-r",
    help="Release semantic version, i.e 1.2.3",
    required=True,
    callback=_validate_release,
)
@network_option
@click.option(
    "--deployments-dir",
    help="hardhat-deploy records root",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("deployments"),
    show_default=True,
)
@click.option(
    "--releases-dir",
    help="Release manifests root",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("releases"),
    show_default=True,
)
def create_release_command(release, network, deployments_dir, releases_dir):
    """Create or update a release file from deploy data."""
    path = create_release(release, network, deployments_dir, releases_dir)
    click.echo(f"Release file: {path}")
    click.secho(f"{network} release {release} is created successfully!", fg="green")


@cli.command("propose-multisig-tx")
@network_option
@safe_address_option
@click.option(
    "--calls",
    help="JSON file holding a list of {to, value, data} calls",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    required=True,
)
def propose_multisig_tx(network, safe_address, calls):
    """Propose a batch of calls to the Safe for co-signing."""
    with open(calls) as f:
        descriptors = json.load(f)

    batch = build_batch(descriptors)
    signer, client, multisend_address = _proposal_components(network)
    receipt = propose_transaction(safe_address, batch, client, signer, client, multisend_address)

    click.secho(f"MultiSig tx '{receipt.safe_tx_hash}' was proposed.", fg="blue")
    click.secho(f"Nonce {receipt.transaction.nonce}, proposed by {receipt.sender}.", fg="blue")


@cli.command("queue-multisig-tx")
@safe_address_option
@click.option("--to", "to", help="Destination address", required=True)
@click.option("--data", help="ABI-encoded call payload", required=True)
@click.option("--value", help="Native value in wei", default="0", show_default=True)
@queue_file_option
def queue_multisig_tx(safe_address, to, data, value, queue_file):
    """Save a call for later batch proposal."""
    queue = MultisigBatchQueue(queue_file)
    if queue.add(safe_address, to, data, value):
        click.echo(f"Queued call to {to}.")
    else:
        click.echo(f"Call to {to} is already queued.")


@cli.command("propose-queued-batch")
@network_option
@safe_address_option
@queue_file_option
def propose_queued_batch_command(network, safe_address, queue_file):
    """Propose every queued call as one multisig batch."""
    queue = MultisigBatchQueue(queue_file)
    if not queue.exists():
        click.echo("No queued multisig calls.")
        return

    signer, client, multisend_address = _proposal_components(network)
    receipt = propose_queued_batch(queue, safe_address, client, signer, client, multisend_address)
    if receipt is None:
        click.echo("No queued multisig calls.")
        return

    click.secho(f"MultiSig tx '{receipt.safe_tx_hash}' was proposed.", fg="blue")
    click.secho("Wait for tx to confirm (at least 2 confirmations is recommended).", fg="blue")
    click.secho("After confirmation, you must run the deployment again.", fg="blue")


def main():
    cli()


if __name__ == "__main__":
    main()
