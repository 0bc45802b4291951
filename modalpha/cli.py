import argparse
import sys
from typing import List, Optional

from modalpha import __version__, engine
from modalpha.engine import CIPHER_REGISTRY, WatermarkEngine, log_info, log_warn
from modalpha.errors import CipherError
from modalpha.loader import load_plugins

DEFAULT_METHOD = "modalpha"

# ==========================================
#  CLI LOGIC
# ==========================================

def list_ciphers():
    """Print the registered ciphers, marking those with a length-checked transcript."""
    print("\nAvailable Ciphers:")
    print("-" * 60)
    for name, cipher in CIPHER_REGISTRY.items():
        marker = "REF" if hasattr(cipher, "transcript") else "   "
        print(f"  {name:<12} {marker}  {cipher.description}")
    print("-" * 60)
    print(f"{len(CIPHER_REGISTRY)} cipher(s) registered.")


def _early_option(argv: List[str], flag: str) -> Optional[str]:
    """Value of ``flag`` in ``argv`` before argparse runs (plugins must load first)."""
    for i, arg in enumerate(argv):
        if arg == flag and i + 1 < len(argv):
            return argv[i + 1]
        if arg.startswith(flag + "="):
            return arg.split("=", 1)[1]
    return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modalpha",
        description="Modified-alphabet cipher over the 33-letter Russian alphabet",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    methods = "\n".join(f"  {k:<12}: {v.description}" for k, v in CIPHER_REGISTRY.items())
    parser.add_argument("-m", "--method", choices=list(CIPHER_REGISTRY), default=DEFAULT_METHOD,
                        help=f"Cipher to use (default: {DEFAULT_METHOD}).\n{methods}")
    parser.add_argument("-k", "--key", help="Cipher key (letters for 'modalpha', an integer for 'shift')")
    parser.add_argument("-r", "--reference", metavar="TEXT",
                        help="Reference open text; ciphers with a transcript check the length against it")

    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("-e", "--encrypt", action="store_true", help="Encrypt the input")
    mode.add_argument("-d", "--decrypt", action="store_true", help="Decrypt the input")
    mode.add_argument("-l", "--list", action="store_true", help="List registered ciphers")

    parser.add_argument("--watermark", action="store_true",
                        help="Prefix the cipher text with an invisible mark naming the method,\n"
                             "so decryption can pick it automatically (output is no longer letters only)")
    parser.add_argument("--plugin-dir", metavar="PATH",
                        help="Plugin directory holding a manifest.json")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Print [INFO]/[WARN] diagnostics to stderr")

    source = parser.add_mutually_exclusive_group()
    source.add_argument("-t", "--text", help="Text to process")
    source.add_argument("-i", "--input", help="Read the text from this file")
    parser.add_argument("-o", "--output", help="Write the result to this file")
    return parser


def read_source(args) -> str:
    if args.text:
        return args.text.strip()
    if args.input:
        try:
            with open(args.input, "r", encoding="utf-8") as f:
                return f.read().strip()
        except FileNotFoundError:
            sys.exit(f"Error: File '{args.input}' not found.")
    if sys.stdin.isatty():
        print("[CIPHER] Enter text, then Ctrl+D (Unix) or Ctrl+Z (Win):")
    try:
        return sys.stdin.read().strip()
    except KeyboardInterrupt:
        sys.exit(0)


def run_encrypt(args, text: str) -> str:
    cipher_cls = CIPHER_REGISTRY[args.method]
    try:
        result = cipher_cls.create(args.key, args.reference or text).encrypt(text)
    except CipherError as e:
        sys.exit(f"Encrypt Error: {e}")
    if args.watermark:
        result = WatermarkEngine.inject(result, args.method)
    return result


def run_decrypt(args, text: str) -> str:
    method, body = WatermarkEngine.detect(text)
    if method not in CIPHER_REGISTRY:
        if method:
            log_warn(f"Watermark names unknown cipher '{method}'. Using '{args.method}'.")
        method, body = args.method, text
    elif args.method not in (DEFAULT_METHOD, method):
        log_warn(f"Method '{args.method}' overridden by watermark '{method}'.")
    body = body.strip()

    try:
        cipher = CIPHER_REGISTRY[method].create(args.key, args.reference or body)
        if args.reference and hasattr(cipher, "transcript"):
            return cipher.transcript(body)
        if args.reference:
            log_warn(f"Cipher '{method}' has no transcript. Reference text ignored.")
        return cipher.decrypt(body)
    except CipherError as e:
        sys.exit(f"Decrypt Error ({method}): {e}")


def write_result(args, result: str):
    if not args.output:
        print(result)
        return
    try:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(result + "\n" if args.decrypt else result)
    except OSError as e:
        sys.exit(f"Error writing output: {e}")


def main():
    engine.VERBOSE = "--verbose" in sys.argv or "-v" in sys.argv

    plugins = load_plugins(_early_option(sys.argv, "--plugin-dir"))
    if plugins:
        log_info(f"Loaded plugins: {', '.join(plugins)}")

    parser = build_parser()
    args = parser.parse_args()

    if args.list:
        list_ciphers()
        sys.exit(0)
    if args.key is None:
        parser.error("a key is required to encrypt or decrypt (-k/--key)")

    text = read_source(args)
    result = run_encrypt(args, text) if args.encrypt else run_decrypt(args, text)
    write_result(args, result)

if __name__ == "__main__":
    main()
