import logging

import pytest

from riffcracker.avi import descriptor, hdrl, movi
from riffcracker.avi.avih import MainHeader
from riffcracker.avi.descriptor import MissingListError
from riffcracker.avi.hdrl import HeaderListReader
from riffcracker.avi.movi import MovieDataReader, parse_chunk_id
from riffcracker.avi.preset import avi
from riffcracker.avi.strf import VideoFormat
from riffcracker.avi.strl import Phase, StreamListReader, StreamListState, step
from riffcracker.kernel.chunk import Chunk, ListChunk, mklist, mktag
from riffcracker.kernel.listreader import SemanticMismatch
from riffcracker.kernel.structured import StructuralMismatch

from builders import (
    avi_file,
    avih_chunk,
    hdrl_list,
    main_header,
    movi_list,
    rec_list,
    sample_avi,
    stream_header,
    strf_chunk,
    strh_chunk,
    strl_list,
    video_format,
    video_stream,
)


def test_header_only(caplog):
    data = avi_file(
        hdrl_list(avih_chunk(main_header(total_frames=10, micro_sec_per_frame=100000)))
    )
    with caplog.at_level(logging.WARNING):
        root = descriptor.from_bytes(data)
        desc = descriptor.parse(root)

    hdrl = avi.findpath('hdrl', root)
    assert isinstance(hdrl.reader, HeaderListReader)
    assert len(hdrl.reader.warnings) == 1
    assert isinstance(hdrl.reader.warnings[0], SemanticMismatch)
    assert any('hdrl' in record.getMessage() for record in caplog.records)

    assert desc.header.main_header.total_frames == 10
    assert desc.header.main_header.micro_sec_per_frame == 100000
    assert desc.header.streams == []
    assert desc.movie == {}


def test_declared_stream_count_mismatch():
    root = descriptor.from_bytes(avi_file(hdrl_list(avih_chunk(main_header(streams=2)), video_stream())))
    hdrl = avi.findpath('hdrl', root)
    (warning,) = hdrl.reader.warnings
    assert 'Stream count does not match' in str(warning)
    assert len(descriptor.parse(root).header.streams) == 1


def test_video_stream():
    root = descriptor.from_bytes(
        avi_file(hdrl_list(avih_chunk(main_header(streams=1)), video_stream(320, 240)))
    )
    desc = descriptor.parse(root)
    (stream,) = desc.header.streams
    assert stream.type == 'vids'
    assert stream.handler == 'MJPG'
    assert stream.frame_rate == 25.0
    assert (stream.width, stream.height, stream.bit_count) == (320, 240, 24)
    assert isinstance(stream.format, VideoFormat)
    assert avi.findpath('hdrl', root).reader.warnings == []
    assert avi.findpath('hdrl/strl', root).reader.warnings == []


def test_audio_format_is_opaque():
    wave_format = bytes(range(16))
    strl = strl_list(strh_chunk(stream_header(type='auds')), mktag('strf', wave_format))
    root = descriptor.from_bytes(avi_file(hdrl_list(avih_chunk(main_header(streams=1)), strl)))
    (stream,) = descriptor.parse(root).header.streams
    assert stream.type == 'auds'
    assert isinstance(stream.format, Chunk)
    assert bytes(stream.format.data) == wave_format
    assert stream.width is None


def test_stream_list_without_format():
    root = avi.read_chunk(strl_list(strh_chunk(stream_header())))
    assert isinstance(root.reader, StreamListReader)
    assert root.reader.header.type == 'vids'
    assert root.reader.format is None
    assert len(root.reader.warnings) == 1


def test_strict_mode_raises():
    with pytest.raises(SemanticMismatch):
        avi(strict=True).read_chunk(strl_list(strh_chunk(stream_header())))


def test_stream_list_steps():
    header = Chunk('strh', 56, memoryview(strh_chunk(stream_header())), stream_header())
    fmt = Chunk('strf', 40, memoryview(strf_chunk(video_format(width=8))))

    state = step(StreamListState(), fmt)
    assert state.phase == Phase.EXPECT_HEADER

    state = step(state, header)
    assert state.phase == Phase.EXPECT_FORMAT
    state = step(state, Chunk('JUNK', 0, memoryview(mktag('JUNK', b''))))
    assert state.phase == Phase.EXPECT_FORMAT

    state = step(state, fmt)
    assert state.phase == Phase.DONE
    assert state.format.width == 8


def test_stream_lists_between_other_chunks():
    data = avi_file(
        hdrl_list(
            mktag('JUNK', bytes(6)),
            avih_chunk(main_header(streams=2)),
            video_stream(),
            mktag('JUNK', bytes(2)),
            mklist('LIST', 'odml', [mktag('dmlh', bytes(4))]),
            video_stream(640, 480),
        )
    )
    desc = descriptor.load(data)
    assert [(s.width, s.height) for s in desc.header.streams] == [(320, 240), (640, 480)]


def test_movie_data():
    root = avi.read_chunk(
        movi_list(mktag('00dc', b'frame-a'), mktag('00dc', b'frame-b'), mktag('01wb', b'pcm'))
    )
    assert isinstance(root.reader, MovieDataReader)
    streams = root.reader.streams
    assert sorted(streams) == [0, 1]
    assert [(bytes(f.data), f.type) for f in streams[0]] == [(b'frame-a', 'dc'), (b'frame-b', 'dc')]
    assert [(bytes(f.data), f.type) for f in streams[1]] == [(b'pcm', 'wb')]


def test_record_groups_are_flattened():
    chunks = [mktag('00dc', b'video'), mktag('01wb', b'audio'), mktag('00dc', b'video2')]
    flat = avi.read_chunk(movi_list(*chunks)).reader.streams
    grouped = avi.read_chunk(
        movi_list(rec_list(*chunks[:2]), chunks[2])
    ).reader.streams

    def frames(streams):
        return {idx: [(bytes(f.data), f.type) for f in seq] for idx, seq in streams.items()}

    assert frames(grouped) == frames(flat)
    assert frames(grouped)[0] == [(b'video', 'dc'), (b'video2', 'dc')]


def test_movie_data_ignores_non_stream_chunks():
    root = avi.read_chunk(
        movi_list(
            mktag('JUNK', bytes(4)),
            mktag('ix00', bytes(8)),
            mklist('LIST', 'othr', [mktag('00dc', b'hidden')]),
            mktag('00db', b'raw'),
        )
    )
    assert {idx: [f.type for f in seq] for idx, seq in root.reader.streams.items()} == {0: ['db']}
    assert len(root.children) == 4


def test_parse_chunk_id():
    assert parse_chunk_id('00dc') == (0, movi.COMPRESSED_VIDEO)
    assert parse_chunk_id('12wb') == (12, movi.AUDIO_DATA)
    assert parse_chunk_id('ix00') is None
    assert parse_chunk_id('JUNK') is None


def test_first_header_list_wins():
    data = avi_file(
        hdrl_list(avih_chunk(main_header(total_frames=1))),
        hdrl_list(avih_chunk(main_header(total_frames=2))),
    )
    assert descriptor.load(data).header.main_header.total_frames == 1


def test_missing_header_list():
    with pytest.raises(MissingListError):
        descriptor.load(avi_file(movi_list(mktag('00dc', b''))))


def test_full_file():
    data = sample_avi([rec_list(mktag('00dc', b'\xff\xd8jpeg')), mktag('00dc', b'\xff\xd8')])
    desc = descriptor.load(data, skip_junk=True)
    assert isinstance(desc.header.main_header, MainHeader)
    ((idx, stream, frames),) = list(desc.video_streams())
    assert idx == 0
    assert stream.width == 320
    assert [bytes(f.data) for f in frames] == [b'\xff\xd8jpeg', b'\xff\xd8']


def test_structural_mismatch_aborts_parse():
    bad = mktag('avih', bytes(60))
    with pytest.raises(StructuralMismatch):
        descriptor.from_bytes(avi_file(hdrl_list(bad)))


def test_avi_root_is_list():
    root = descriptor.from_bytes(sample_avi())
    assert isinstance(root, ListChunk)
    assert (root.tag, root.list_type) == ('RIFF', 'AVI ')


def test_header_list_without_main_header():
    root = descriptor.from_bytes(avi_file(hdrl_list(video_stream())))
    (warning,) = avi.findpath('hdrl', root).reader.warnings
    assert isinstance(warning, SemanticMismatch)
    assert 'avih' in str(warning)
    assert descriptor.parse(root).header.main_header is None


def test_extra_stream_lists_are_collected():
    root = descriptor.from_bytes(
        avi_file(hdrl_list(avih_chunk(main_header(streams=1)), video_stream(), video_stream(640, 480)))
    )
    reader = avi.findpath('hdrl', root).reader
    assert len(reader.streams) == 2
    (warning,) = reader.warnings
    assert str(warning).endswith('actual count: -1')


def test_header_list_steps():
    header = Chunk('avih', 56, memoryview(avih_chunk(main_header(streams=1))), main_header(streams=1))
    stream = avi.read_chunk(video_stream())

    state = hdrl.step(hdrl.HeaderListState(), stream)
    assert state.phase == hdrl.Phase.EXPECT_MAIN_HEADER
    assert state.streams == ()

    state = hdrl.step(state, header)
    assert state.phase == hdrl.Phase.EXPECT_STREAMS
    assert state.remaining == 1
    state = hdrl.step(state, Chunk('JUNK', 0, memoryview(mktag('JUNK', b''))))
    assert state.phase == hdrl.Phase.EXPECT_STREAMS

    state = hdrl.step(state, stream)
    assert state.phase == hdrl.Phase.DONE
    assert state.remaining == 0
    assert state.streams == (stream.reader,)

    state = hdrl.step(state, stream)
    assert state.phase == hdrl.Phase.EXPECT_STREAMS
    assert state.remaining == -1
    assert len(state.streams) == 2


def test_missing_movie_list_uses_parse_logger(caplog):
    logger = logging.getLogger('riffcracker.tests.avi')
    root = avi(logger=logger).read_chunk(
        avi_file(hdrl_list(avih_chunk(main_header(streams=1)), video_stream()))
    )
    with caplog.at_level(logging.WARNING, logger=logger.name):
        desc = descriptor.parse(root)
    assert desc.movie == {}
    (record,) = [r for r in caplog.records if 'movi' in r.getMessage()]
    assert record.name == logger.name
