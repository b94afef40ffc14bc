import os
from dataclasses import dataclass

import solcx

# --- Configuration ---
CONTRACTS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "contracts")
DEFAULT_SOURCE_PATH = os.path.join(CONTRACTS_DIR, "Campaign.sol")
DEFAULT_CONTRACT_NAME = "Campaign"
DEFAULT_SOLC_VERSION = "0.8.20" # Installed when no 0.8.x compiler is present
DEFAULT_OUTPUT_VALUES = ("abi", "evm.bytecode.object")


class ContractNotFoundError(KeyError):
    """Raised when the compiler output has no entry for the requested contract."""


class EmptyBytecodeError(ContractNotFoundError):
    """Raised when the contract compiled to no bytecode (interface or abstract contract)."""


@dataclass(frozen=True)
class CompileConfig:
    source_path: str = DEFAULT_SOURCE_PATH
    contract_name: str = DEFAULT_CONTRACT_NAME
    solc_version: str | None = None
    allow_paths: tuple = ()
    output_values: tuple = DEFAULT_OUTPUT_VALUES


@dataclass(frozen=True)
class CompiledArtifact:
    abi: list
    bytecode: str


def ensure_solc_version(version: str | None = None):
    """
    Makes sure a solc binary is installed and selected for compilation.

    With an explicit version, that version is installed if missing. Otherwise the
    first installed 0.8.x compiler is reused, falling back to installing
    DEFAULT_SOLC_VERSION. Returns the selected version.
    """
    installed_versions = solcx.get_installed_solc_versions()

    if version:
        version = version.lstrip("v")
        if version not in [str(v) for v in installed_versions]:
            print(f"solc {version} not installed. Installing...")
            solcx.install_solc(version)
        solcx.set_solc_version(version, silent=True)
        print(f"Using solc version: {solcx.get_solc_version()}")
        return solcx.get_solc_version()

    target_version = None
    for v in installed_versions:
        if v.major == 0 and v.minor == 8: # Looking for any 0.8.x
            target_version = v
            break

    if not target_version:
        print(f"No suitable 0.8.x solc version found. Installing {DEFAULT_SOLC_VERSION}...")
        solcx.install_solc(DEFAULT_SOLC_VERSION)
        target_version = DEFAULT_SOLC_VERSION

    solcx.set_solc_version(target_version, silent=True)
    print(f"Using solc version: {solcx.get_solc_version()}")
    return solcx.get_solc_version()


def build_compiler_input(source: str, file_name: str, output_values=DEFAULT_OUTPUT_VALUES) -> dict:
    """Wraps one source file into a standard-JSON compiler request."""
    return {
        "language": "Solidity",
        "sources": {
            file_name: {"content": source},
        },
        "settings": {
            "outputSelection": {
                "*": {
                    "*": list(output_values),
                },
            },
        },
    }


def extract_artifact(output: dict, file_name: str, contract_name: str) -> CompiledArtifact:
    """
    Picks the ABI and bytecode of one contract out of a standard-JSON compiler response.

    Raises ContractNotFoundError when the file or the contract is absent, listing
    the contracts that were compiled instead.
    """
    contracts = output.get("contracts", {})
    try:
        contract_interface = contracts[file_name][contract_name]
    except KeyError:
        found = [f"{src}:{name}" for src, names in contracts.items() for name in names]
        raise ContractNotFoundError(
            f"Could not find contract '{contract_name}' in '{file_name}'. Found: {found}"
        ) from None

    bytecode = contract_interface["evm"]["bytecode"]["object"]
    if not bytecode:
        raise EmptyBytecodeError(
            f"Contract '{contract_name}' in '{file_name}' has no bytecode. Is it an interface or abstract?"
        )

    return CompiledArtifact(abi=contract_interface["abi"], bytecode=bytecode)


def compile_contract(config: CompileConfig | None = None) -> CompiledArtifact:
    """
    Compiles config.source_path and returns the ABI and bytecode of config.contract_name.

    Nothing is caught here: a missing source raises FileNotFoundError, invalid
    Solidity raises solcx.exceptions.SolcError and an absent contract raises
    ContractNotFoundError.
    """
    config = config or CompileConfig()

    if not os.path.exists(config.source_path):
        raise FileNotFoundError(f"Contract source not found: {config.source_path}")

    with open(config.source_path, 'r', encoding='utf-8') as f:
        source = f.read()

    file_name = os.path.basename(config.source_path)
    compiler_input = build_compiler_input(source, file_name, config.output_values)

    solc_version = ensure_solc_version(config.solc_version)

    print(f"Compiling {config.source_path}...")
    compile_kwargs = {"solc_version": solc_version}
    if config.allow_paths:
        compile_kwargs["allow_paths"] = [os.path.abspath(p) for p in config.allow_paths]
    output = solcx.compile_standard(compiler_input, **compile_kwargs)

    return extract_artifact(output, file_name, config.contract_name)
