from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from mediatools.logging_utils import setup_logging, get_logger
from mediatools.wav import pcm_to_wav

log = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="生PCMデータにWAVヘッダを付与する")
    parser.add_argument("--input", type=Path, required=True, help="入力PCMファイル (リトルエンディアン)")
    parser.add_argument("--output", type=Path, required=True, help="出力WAVファイルのパス")
    parser.add_argument("--sample_rate", type=int, default=16000, help="サンプリングレート (デフォルト: 16000)")
    parser.add_argument("--channels", type=int, default=1, help="チャンネル数 (デフォルト: 1)")
    parser.add_argument("--bit_depth", type=int, default=16, help="量子化ビット数 (デフォルト: 16)")
    parser.add_argument("--log_level", type=str, default=None, help="ログレベル (e.g., INFO, DEBUG)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point.

    Example:
      python3 wrap_pcm.py --input voice.pcm --output voice.wav --sample_rate 24000
    """
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        pcm = args.input.read_bytes()
    except OSError as e:
        log.error("PCMファイルを読み込めません", extra={"file": str(args.input), "error": str(e)})
        return 1

    wav = pcm_to_wav(pcm, args.sample_rate, args.channels, args.bit_depth)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(wav)
    log.info("WAV written", extra={
        "file": str(args.output), "pcm_bytes": len(pcm), "sample_rate": args.sample_rate,
        "channels": args.channels, "bit_depth": args.bit_depth,
    })
    return 0


if __name__ == "__main__":
    sys.exit(main())
