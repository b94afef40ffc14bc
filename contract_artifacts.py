import json
import os

from web3 import Web3

from contract_compiler import CompiledArtifact

# --- Configuration ---
ABI_FILE_PATH_TEMPLATE = "{}.abi.json"
BYTECODE_FILE_PATH_TEMPLATE = "{}.bytecode.txt"


def artifact_paths(contract_name: str, artifact_dir: str = ".") -> tuple[str, str]:
    abi_file = os.path.join(artifact_dir, ABI_FILE_PATH_TEMPLATE.format(contract_name))
    bytecode_file = os.path.join(artifact_dir, BYTECODE_FILE_PATH_TEMPLATE.format(contract_name))
    return abi_file, bytecode_file


def save_artifact(artifact: CompiledArtifact, contract_name: str, output_dir: str = ".") -> tuple[str, str]:
    """
    Writes the ABI and bytecode next to each other so a deployment step can pick them up.

    Returns the (abi_file, bytecode_file) paths.
    """
    os.makedirs(output_dir, exist_ok=True)
    abi_file, bytecode_file = artifact_paths(contract_name, output_dir)

    with open(abi_file, 'w') as f:
        json.dump(artifact.abi, f, indent=4)
    print(f"ABI saved to {abi_file}")

    with open(bytecode_file, 'w') as f:
        f.write(artifact.bytecode)
    print(f"Bytecode saved to {bytecode_file}")

    return abi_file, bytecode_file


def load_artifact(contract_name: str, artifact_dir: str = ".") -> CompiledArtifact:
    abi_file, bytecode_file = artifact_paths(contract_name, artifact_dir)

    if not os.path.exists(abi_file):
        raise FileNotFoundError(f"ABI file '{abi_file}' not found. Please compile the contract first.")
    if not os.path.exists(bytecode_file):
        raise FileNotFoundError(f"Bytecode file '{bytecode_file}' not found. Please compile the contract first.")

    with open(abi_file, 'r') as f:
        abi = json.load(f)
    with open(bytecode_file, 'r') as f:
        bytecode = f.read().strip()

    return CompiledArtifact(abi=abi, bytecode=bytecode)


def contract_factory(artifact: CompiledArtifact, w3: Web3 | None = None):
    """
    Returns a web3 contract factory for the artifact, ready for a deployment step.
    No provider call is made; a bare Web3() is used when w3 is not given.
    """
    w3 = w3 or Web3()
    return w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
