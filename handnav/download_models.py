"""
Fetch the MediaPipe model bundles handnav needs into models/.
"""
import argparse
import logging
from pathlib import Path
from typing import Optional

import requests

logger = logging.getLogger(__name__)

MODELS = {
    "hand_landmarker.task": {
        "url": "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/1/hand_landmarker.task",
        "size": "~8MB",
        "description": "MediaPipe hand landmark model (21 keypoints)",
    },
}

CHUNK_SIZE = 64 * 1024


def _print_progress(downloaded: int, total: int) -> None:
    percent = min(downloaded * 100 / total, 100) if total > 0 else 0
    filled = int(40 * percent / 100)
    bar = "█" * filled + "░" * (40 - filled)
    print(f"\r  [{bar}] {percent:.1f}% ({downloaded / 2**20:.1f}/{total / 2**20:.1f} MB)", end="", flush=True)


def download_model(name: str, info: dict, output_dir: Path, force: bool = False,
                   timeout: float = 30.0) -> bool:
    """
    Download one model file.

    The body is streamed into ``<name>.tmp`` and renamed once complete, so an
    interrupted download never leaves a truncated model behind.

    Args:
        name: File name to save as
        info: Entry from MODELS
        output_dir: Directory to save into
        force: Download even if the file already exists
        timeout: Connect/read timeout in seconds

    Returns:
        True if the file is present afterwards
    """
    file_path = output_dir / name
    if file_path.exists() and not force:
        print(f"✓ {name} already exists, skipping")
        return True

    print(f"📦 Downloading {name} ({info['size']}): {info['description']}")
    temp_path = file_path.with_suffix(file_path.suffix + ".tmp")
    try:
        with requests.get(info["url"], stream=True, timeout=timeout) as response:
            response.raise_for_status()
            total = int(response.headers.get("content-length", 0))
            downloaded = 0
            with open(temp_path, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    f.write(chunk)
                    downloaded += len(chunk)
                    _print_progress(downloaded, total)
        print()
        temp_path.replace(file_path)
    except (requests.RequestException, OSError) as e:
        print()
        logger.error(f"❌ Download failed for {name}: {e}")
        if temp_path.exists():
            temp_path.unlink()
        return False

    print(f"✅ Saved {file_path}")
    return True


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Download the model files handnav needs")
    parser.add_argument("--output-dir", type=Path, default=Path("models"),
                        help="Directory to save models into (default: models/)")
    parser.add_argument("--force", action="store_true", help="Download again even if present")
    parser.add_argument("--list", action="store_true", help="List available models and exit")
    return parser.parse_args(argv)


def main(argv: Optional[list] = None) -> int:
    """Entry point; returns a process exit code."""
    args = parse_args(argv)

    if args.list:
        for name, info in MODELS.items():
            print(f"{name}  {info['size']}  {info['description']}")
            print(f"  {info['url']}")
        return 0

    args.output_dir.mkdir(parents=True, exist_ok=True)
    failed = [name for name, info in MODELS.items()
              if not download_model(name, info, args.output_dir, force=args.force)]
    if failed:
        print(f"Failed: {', '.join(failed)}. Run again to retry.")
        return 1
    return 0


def cli() -> None:
    logging.basicConfig(level=logging.INFO)
    raise SystemExit(main())


if __name__ == "__main__":
    cli()
