import importlib.util
import json
from pathlib import Path
from typing import List, Optional

from modalpha.alphabet import RUSSIAN
from modalpha.ciphers import (
    AlphabetCipher,
    ModAlphaCipher,
    shift_decode,
    shift_encode,
    valid_key,
    valid_text,
)
from modalpha.engine import CIPHER_REGISTRY, CipherStrategy, log_warn, register_cipher
from modalpha.errors import InvalidKey, InvalidText

# ==========================================
#  PLUGIN SYSTEM: Manifest-Driven Loading
# ==========================================

BUNDLED_PLUGINS = Path(__file__).parent / "plugins"

# Names made available to every plugin module before it runs
PLUGIN_NAMESPACE = {
    "CipherStrategy": CipherStrategy,
    "AlphabetCipher": AlphabetCipher,
    "ModAlphaCipher": ModAlphaCipher,
    "register_cipher": register_cipher,
    "shift_encode": shift_encode,
    "shift_decode": shift_decode,
    "valid_key": valid_key,
    "valid_text": valid_text,
    "RUSSIAN": RUSSIAN,
    "InvalidKey": InvalidKey,
    "InvalidText": InvalidText,
}


def _manifest_entries(manifest_path: Path) -> List[dict]:
    """
    Plugin entries of a manifest, or [] when it can't be used.

    Expected shape: {"plugins": [{"file": "x.py", "cipher": "x"}, ...]}.
    Entries that are not objects are dropped with a warning.
    """
    try:
        with open(manifest_path, "r", encoding="utf-8") as f:
            manifest = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        log_warn(f"Failed to read {manifest_path}: {e}")
        return []

    if not isinstance(manifest, dict):
        log_warn(f"{manifest_path}: top level must be an object, got {type(manifest).__name__}")
        return []
    entries = manifest.get("plugins", [])
    if not isinstance(entries, list):
        log_warn(f"{manifest_path}: 'plugins' must be a list, got {type(entries).__name__}")
        return []

    usable = []
    for entry in entries:
        if isinstance(entry, dict):
            usable.append(entry)
        else:
            log_warn(f"{manifest_path}: skipping plugin entry {entry!r}, expected an object")
    return usable


def _exec_plugin(filepath: Path):
    spec = importlib.util.spec_from_file_location(filepath.stem, filepath)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot load {filepath}")
    module = importlib.util.module_from_spec(spec)
    module.__dict__.update(PLUGIN_NAMESPACE)
    spec.loader.exec_module(module)


def load_plugins(plugin_dir: Optional[str] = None) -> List[str]:
    """
    Register the ciphers listed in ``plugin_dir/manifest.json``.

    Defaults to the plugins bundled with the package. Returns the cipher
    names (or file names, for entries without a "cipher") that loaded.
    Problems with the manifest or a single plugin are reported through
    log_warn and skipped.
    """
    directory = BUNDLED_PLUGINS if plugin_dir is None else Path(plugin_dir)
    if not directory.exists():
        return []

    manifest_path = directory / "manifest.json"
    if not manifest_path.exists():
        log_warn(f"No manifest.json in {directory}. Skipping plugin loading.")
        return []

    loaded = []
    for entry in _manifest_entries(manifest_path):
        filename = entry.get("file")
        cipher_name = entry.get("cipher")
        if not filename:
            continue

        filepath = directory / filename
        if not filepath.exists():
            log_warn(f"Plugin file not found: {filepath}")
            continue

        try:
            _exec_plugin(filepath)
        except Exception as e:
            log_warn(f"Failed to load plugin {filename}: {e}")
            continue

        if not cipher_name:
            loaded.append(filename)
        elif cipher_name in CIPHER_REGISTRY:
            loaded.append(cipher_name)
        else:
            log_warn(f"Plugin {filename} did not register cipher '{cipher_name}'")

    return loaded
