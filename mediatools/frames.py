from __future__ import annotations

import base64
import binascii
import re
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional

from mediatools.config import Settings, get_settings
from mediatools.errors import DecodeFailureError, ExternalProcessError
from mediatools.logging_utils import get_logger

log = get_logger(__name__)

INPUT_NAME = "input.mp4"
FRAME_PATTERN = "frame_%04d.jpg"
_FRAME_NAME_RE = re.compile(r"^frame_(\d+)\.jpg$")


def build_ffmpeg_command(input_path: Path, output_pattern: Path, fps: int, jpeg_quality: int,
                         ffmpeg_bin: str = "ffmpeg") -> List[str]:
    """Return the ffmpeg argv that samples ``fps`` JPEG frames per second."""
    return [
        ffmpeg_bin,
        "-i", str(input_path),
        "-vf", f"fps={fps}",
        "-qscale:v", str(jpeg_quality),
        "-f", "image2",
        str(output_pattern),
    ]


def _frame_index(path: Path) -> int:
    match = _FRAME_NAME_RE.match(path.name)
    return int(match.group(1)) if match else -1


def list_frame_files(directory: Path) -> List[Path]:
    """Generated frame files ordered by their numeric frame index."""
    frames = [p for p in directory.iterdir() if _FRAME_NAME_RE.match(p.name)]
    return sorted(frames, key=_frame_index)


def _run_ffmpeg(cmd: List[str]) -> None:
    log.debug("ffmpeg start", extra={"cmd": cmd})
    try:
        completed = subprocess.run(cmd, capture_output=True, text=True, errors="replace", check=False)
    except OSError as e:
        raise ExternalProcessError(f"failed to start {cmd[0]}: {e}") from e
    if completed.returncode != 0:
        stderr = (completed.stderr or completed.stdout or "").strip()
        raise ExternalProcessError(
            f"ffmpeg failed with exit code {completed.returncode}: {stderr[-800:]}",
            returncode=completed.returncode,
            stderr=stderr,
        )


def extract_frames_as_base64(video_base64: str, *, fps: Optional[int] = None,
                             settings: Optional[Settings] = None) -> List[str]:
    """Sample JPEG frames from a base64 video with ffmpeg and return them base64-encoded.

    Frames are returned in frame-index order. A frame file that cannot be
    read is logged and skipped, so the result may be partial.

    Raises:
        DecodeFailureError: the payload is not valid base64.
        ExternalProcessError: the scratch directory cannot be created, or
            ffmpeg cannot be started or exits non-zero.
    """
    settings = settings or get_settings()
    fps = fps if fps is not None else settings.frame_rate

    try:
        # Line breaks from wrapped (MIME style) payloads are ignored.
        stripped = video_base64.replace("\r", "").replace("\n", "")
        video_data = base64.b64decode(stripped, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeFailureError(f"failed to decode base64 input: {e}") from e

    try:
        scratch = tempfile.TemporaryDirectory(prefix="video_frames_")
    except OSError as e:
        raise ExternalProcessError(f"failed to create temp dir: {e}") from e

    with scratch as td:
        tmp = Path(td)
        input_path = tmp / INPUT_NAME
        try:
            input_path.write_bytes(video_data)
        except OSError as e:
            raise ExternalProcessError(f"failed to write input video: {e}") from e

        _run_ffmpeg(build_ffmpeg_command(
            input_path, tmp / FRAME_PATTERN, fps, settings.jpeg_quality, settings.ffmpeg_bin,
        ))

        frames: List[str] = []
        for frame_path in list_frame_files(tmp):
            try:
                data = frame_path.read_bytes()
            except OSError as e:
                log.warning("failed to read frame; skip", extra={"file": frame_path.name, "error": str(e)})
                continue
            frames.append(base64.b64encode(data).decode("ascii"))

    log.info("extracted frames", extra={"count": len(frames), "fps": fps})
    return frames
