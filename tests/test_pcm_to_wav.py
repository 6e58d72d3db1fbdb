from __future__ import annotations

import struct

from mediatools.wav import WAV_HEADER_SIZE, concat_wav_bytes, decode_wav, pcm_to_wav

from conftest import read_wav


def _u16(data: bytes, offset: int) -> int:
    return struct.unpack_from("<H", data, offset)[0]


def _u32(data: bytes, offset: int) -> int:
    return struct.unpack_from("<I", data, offset)[0]


def test_header_fields_for_16k_mono_16bit() -> None:
    wav = pcm_to_wav(bytes([0x01, 0x02, 0x03, 0x04]), 16000, 1, 16)

    assert len(wav) == 48
    assert wav[0:4] == b"RIFF"
    assert _u32(wav, 4) == 40
    assert wav[8:12] == b"WAVE"
    assert wav[12:16] == b"fmt "
    assert _u32(wav, 16) == 16
    assert _u16(wav, 20) == 1
    assert _u16(wav, 22) == 1
    assert _u32(wav, 24) == 16000
    assert _u32(wav, 28) == 32000
    assert _u16(wav, 32) == 2
    assert _u16(wav, 34) == 16
    assert wav[36:40] == b"data"
    assert _u32(wav, 40) == 4
    assert wav[44:] == b"\x01\x02\x03\x04"


def test_payload_is_copied_verbatim() -> None:
    pcm = bytes(range(256)) * 3
    wav = pcm_to_wav(pcm, 48000, 2, 16)

    assert len(wav) == WAV_HEADER_SIZE + len(pcm)
    assert wav[WAV_HEADER_SIZE:] == pcm


def test_empty_payload_gives_bare_header() -> None:
    wav = pcm_to_wav(b"", 8000, 1, 8)
    assert len(wav) == WAV_HEADER_SIZE
    assert _u32(wav, 4) == 36
    assert _u32(wav, 40) == 0


def test_stdlib_reader_recovers_format_and_payload() -> None:
    pcm = b"".join(struct.pack("<hh", i, -i) for i in range(100))
    params, raw = read_wav(pcm_to_wav(pcm, 22050, 2, 16))

    assert params.framerate == 22050
    assert params.nchannels == 2
    assert params.sampwidth == 2
    assert params.nframes == 100
    assert raw == pcm


def test_decode_wav_recovers_synthesized_format() -> None:
    pcm = b"\x00\x00\x01" * 10
    decoded = decode_wav(pcm_to_wav(pcm, 96000, 1, 24))

    assert decoded.format.sample_rate == 96000
    assert decoded.format.num_channels == 1
    assert decoded.format.bit_depth == 24
    assert decoded.num_frames == 10


def test_synthesized_buffers_concatenate() -> None:
    a = pcm_to_wav(struct.pack("<3h", 1, 2, 3), 16000, 1, 16)
    b = pcm_to_wav(struct.pack("<2h", 4, 5), 16000, 1, 16)

    assert decode_wav(concat_wav_bytes([a, b])).samples.tolist() == [1, 2, 3, 4, 5]


def test_out_of_range_parameters_do_not_raise() -> None:
    wav = pcm_to_wav(b"\x00" * 6, -1, 0, 12)

    assert len(wav) == WAV_HEADER_SIZE + 6
    assert _u32(wav, 24) == 0xFFFFFFFF
    assert _u16(wav, 22) == 0
    assert _u32(wav, 28) == 0
    assert _u16(wav, 34) == 12


def test_block_align_truncates_odd_bit_depths() -> None:
    wav = pcm_to_wav(b"", 1000, 3, 12)
    assert _u16(wav, 32) == 4
    assert _u32(wav, 28) == 4500
