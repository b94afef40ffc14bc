import json
import sys

import click
from solcx.exceptions import SolcError, SolcInstallationError

import contract_artifacts
import contract_compiler


def print_json(data):
    if data is not None:
        click.echo(json.dumps(data, indent=2, sort_keys=True))
    else:
        click.echo("No data to display.")


def _signature(entry):
    inputs = ", ".join(i["type"] for i in entry.get("inputs", []))
    name = entry.get("name", entry["type"])
    return f"{name}({inputs})"


@click.group()
def cli():
    """Campaign contract build tools."""


@cli.command('compile')
@click.option('--source', 'source_path', default=contract_compiler.DEFAULT_SOURCE_PATH, show_default=True,
              type=click.Path(dir_okay=False), help="Solidity source file to compile.")
@click.option('--contract', 'contract_name', default=contract_compiler.DEFAULT_CONTRACT_NAME, show_default=True,
              help="Name of the contract to extract from the compiler output.")
@click.option('--solc-version', help="Exact solc version to use (installed if missing).")
@click.option('--allow-path', 'allow_paths', multiple=True, type=click.Path(file_okay=False),
              help="Extra directory the compiler may import from. Repeatable.")
@click.option('--output-dir', default=".", show_default=True, type=click.Path(file_okay=False),
              help="Directory for the .abi.json and .bytecode.txt files.")
@click.option('--print-abi', is_flag=True, help="Also print the ABI.")
def compile_command(source_path, contract_name, solc_version, allow_paths, output_dir, print_abi):
    """Compiles a contract and saves its ABI and bytecode."""
    config = contract_compiler.CompileConfig(
        source_path=source_path,
        contract_name=contract_name,
        solc_version=solc_version,
        allow_paths=tuple(allow_paths),
    )
    try:
        artifact = contract_compiler.compile_contract(config)
    except (OSError, UnicodeDecodeError) as e:
        click.secho(f"Error: {e}", fg="red")
        sys.exit(1)
    except SolcError as e:
        click.secho(f"Solc compilation error: {e}", fg="red")
        sys.exit(1)
    except SolcInstallationError as e:
        click.secho(f"Failed to install solc: {e}", fg="red")
        sys.exit(1)
    except contract_compiler.ContractNotFoundError as e:
        click.secho(f"Error: {e.args[0]}", fg="red")
        sys.exit(1)

    contract_artifacts.save_artifact(artifact, contract_name, output_dir)
    if print_abi:
        print_json(artifact.abi)
    click.secho(f"'{contract_name}' compiled successfully.", fg="green")


@cli.command('inspect')
@click.argument('contract_name')
@click.option('--artifact-dir', default=".", show_default=True, type=click.Path(file_okay=False),
              help="Directory holding the saved artifact.")
def inspect_command(contract_name, artifact_dir):
    """Summarises a saved ABI and bytecode."""
    try:
        artifact = contract_artifacts.load_artifact(contract_name, artifact_dir)
    except FileNotFoundError as e:
        click.secho(f"Error: {e}", fg="red")
        sys.exit(1)

    factory = contract_artifacts.contract_factory(artifact)
    click.echo(f"Contract: {contract_name}")
    for entry in artifact.abi:
        if entry["type"] in ("constructor", "function", "event"):
            click.echo(f"  {entry['type']}: {_signature(entry)}")
    click.echo(f"Bytecode size: {len(factory.bytecode or b'')} bytes")


if __name__ == '__main__':
    cli()
