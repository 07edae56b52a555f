"""Kids English question bank dev launcher.

    uv run python main.py                      # API on BACKEND_PORT, reloading
    uv run python main.py --demo               # reseed demo folders/questions first
    uv run python main.py --import words.json  # import a document, then serve
    uv run python main.py --import words.json --no-serve
"""

import argparse
import logging
import os
import signal
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "0.0.0.0")
BACKEND_PORT = os.getenv("BACKEND_PORT", "13013")

logger = logging.getLogger("kids_english.launcher")


def import_file(path: Path) -> int:
    """Commit an import document into the initialised store. Returns records skipped."""
    from backend import storage
    from kids_english import DocumentError
    from kids_english.importer import parse_document

    try:
        records = parse_document(path.read_bytes())
    except (OSError, DocumentError) as e:
        logger.error("Cannot import %s: %s", path, e)
        return -1

    bank = storage.bank()
    preview = bank.analyze_import(records)
    print(preview.summary())
    result = bank.commit_import(records)
    print(result.summary())
    return result.skipped


def main():
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"), format="%(levelname)s %(name)s: %(message)s")

    parser = argparse.ArgumentParser(description="Kids English question bank dev launcher")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Data storage directory (default: ./data)")
    parser.add_argument("--demo", action="store_true",
                        help="Wipe folders and questions, then import the demo set")
    parser.add_argument("--import", dest="import_path", type=Path, default=None, metavar="FILE",
                        help="Import a JSON document of question records before serving")
    parser.add_argument("--no-serve", action="store_true",
                        help="Exit after --demo/--import instead of starting the API")
    args = parser.parse_args()

    data_dir = args.data_dir or Path(os.getenv("DATA_DIR", str(ROOT / "data")))
    if args.demo or args.import_path:
        from backend import storage
        storage.init_storage(data_dir)
        if args.demo:
            from backend.demo import create_demo_data
            create_demo_data()
        if args.import_path and import_file(args.import_path) < 0:
            sys.exit(1)

    if args.no_serve:
        return

    # The reloading server runs in a subprocess; hand it the same data dir
    env = os.environ.copy()
    env["DATA_DIR"] = str(data_dir.resolve())

    procs: list[subprocess.Popen] = []

    def shutdown(*_):
        print("\nShutting down...")
        for p in procs:
            p.terminate()
        for p in procs:
            p.wait()
        sys.exit(0)

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)

    print(f"Question bank API on http://localhost:{BACKEND_PORT}/api (data: {data_dir})")
    procs.append(subprocess.Popen(
        ["uv", "run", "uvicorn", "backend.app:app", "--reload", "--host", HOST, "--port", BACKEND_PORT],
        cwd=ROOT, env=env,
    ))

    for p in procs:
        p.wait()


if __name__ == "__main__":
    main()
