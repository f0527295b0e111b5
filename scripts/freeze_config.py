import argparse
from pathlib import Path

from edge_sim.config import compute_config_hash, freeze_config, load_config, verify_config_lock


def main() -> None:
    parser = argparse.ArgumentParser(description="Freeze or verify a simulator config lock file")
    parser.add_argument("config")
    parser.add_argument("--lock-path", default=None)
    parser.add_argument("--check", action="store_true", help="Only verify an existing lock")
    args = parser.parse_args()

    path = Path(args.config)
    if args.check:
        ok = verify_config_lock(path, args.lock_path)
        print(f"{path}: {'ok' if ok else 'mismatch'} ({compute_config_hash(path)[:12]})")
        raise SystemExit(0 if ok else 1)

    # refuse to lock a config that would not load
    config = load_config(path)
    lock_path = freeze_config(path, args.lock_path)
    status = "ok" if verify_config_lock(path, lock_path) else "mismatch"
    print(f"Frozen {config.name} v{config.version}: {path} -> {lock_path} ({status})")


if __name__ == "__main__":
    main()
