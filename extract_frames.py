from __future__ import annotations

import argparse
import base64
import sys
from pathlib import Path
from typing import List, Optional

from mediatools.errors import MediaToolsError
from mediatools.frames import extract_frames_as_base64
from mediatools.logging_utils import setup_logging, get_logger

log = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments for frame extraction."""
    parser = argparse.ArgumentParser(description="動画からJPEGフレームを抽出する (ffmpeg使用)")
    parser.add_argument("--input", type=Path, required=True, help="入力動画ファイル")
    parser.add_argument("--output_dir", type=Path, required=True, help="フレーム画像の出力ディレクトリ")
    parser.add_argument("--fps", type=int, default=None, help="1秒あたりの抽出フレーム数 (デフォルト: 2)")
    parser.add_argument("--log_level", type=str, default=None, help="ログレベル (e.g., INFO, DEBUG)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point.

    Example:
      python3 extract_frames.py --input clip.mp4 --output_dir frames
    """
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        payload = base64.b64encode(args.input.read_bytes()).decode("ascii")
        frames = extract_frames_as_base64(payload, fps=args.fps)
    except (OSError, MediaToolsError) as e:
        log.error("フレーム抽出に失敗しました", extra={"error": str(e)})
        return 1

    args.output_dir.mkdir(parents=True, exist_ok=True)
    for i, frame in enumerate(frames, start=1):
        (args.output_dir / f"frame_{i:04d}.jpg").write_bytes(base64.b64decode(frame))
    log.info("frames written", extra={"dir": str(args.output_dir), "count": len(frames)})
    return 0


if __name__ == "__main__":
    sys.exit(main())
