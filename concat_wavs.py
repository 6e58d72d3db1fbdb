from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from mediatools.errors import MediaToolsError
from mediatools.logging_utils import setup_logging, get_logger
from mediatools.wav import concat_wav_bytes

log = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments for WAV concatenation."""
    parser = argparse.ArgumentParser(description="複数のWAVファイルを入力順に1つへ結合する")
    parser.add_argument("--inputs", type=Path, nargs="+", required=True, help="入力WAVファイル (結合順)")
    parser.add_argument("--output", type=Path, required=True, help="出力WAVファイルのパス")
    parser.add_argument("--log_level", type=str, default=None, help="ログレベル (e.g., INFO, DEBUG)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point.

    Example:
      python3 concat_wavs.py --inputs intro.wav body.wav outro.wav --output combined.wav
    """
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        wav = concat_wav_bytes([p.read_bytes() for p in args.inputs])
    except (OSError, MediaToolsError) as e:
        log.error("WAV結合に失敗しました", extra={"error": str(e)})
        return 1

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(wav)
    log.info("combined WAV written", extra={"file": str(args.output), "count": len(args.inputs)})
    return 0


if __name__ == "__main__":
    sys.exit(main())
