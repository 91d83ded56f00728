import mido
import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def midi_path(tmp_path):
    """A two-track type-1 file: tempo map plus one short melody."""

    mid = mido.MidiFile(type=1, ticks_per_beat=480)
    conductor = mido.MidiTrack(
        [
            mido.MetaMessage("track_name", name="Conductor", time=0),
            mido.MetaMessage("set_tempo", tempo=500000, time=0),
            mido.MetaMessage("time_signature", numerator=4, denominator=4, time=0),
        ]
    )
    melody = mido.MidiTrack(
        [
            mido.Message("program_change", channel=0, program=5, time=0),
            mido.Message("note_on", channel=0, note=60, velocity=100, time=0),
            mido.Message("note_off", channel=0, note=60, velocity=0, time=480),
            mido.Message("note_on", channel=0, note=69, velocity=80, time=0),
            mido.Message("note_off", channel=0, note=69, velocity=0, time=480),
        ]
    )
    mid.tracks.extend([conductor, melody])
    path = tmp_path / "song.mid"
    mid.save(path)
    return path
