import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from backend.models.chord_note import ChordNote
from backend.models.recording import Recording
from backend.models.song import Song
from backend.routes.chord_note_routes import (
    ChordNoteCreateRequest,
    ChordNoteUpdateRequest,
    create_chord_note,
    delete_chord_note,
    list_chord_notes,
    update_chord_note,
)
from backend.routes.recording_routes import (
    RecordingCreateRequest,
    RecordingResponse,
    RecordingUpdateRequest,
    create_recording,
    get_recording,
    list_recordings,
    update_recording,
)
from backend.routes.song_routes import delete_song


@pytest.fixture
def song(db):
    song = Song(title='Blue in Green', artist='Miles Davis', audio_file='blue.mp3')
    db.add(song)
    db.commit()
    db.refresh(song)
    return song


def _create_recording(db, song_id, **fields):
    payload = {'songId': song_id, 'title': 'Intro take', 'audioUrl': 'file:///take1.m4a', **fields}
    return create_recording(data=RecordingCreateRequest(**payload), current_user=None, db=db)


def test_create_recording_defaults_to_session_type(db, song) -> None:
    recording = _create_recording(db, song.id)

    payload = RecordingResponse.model_validate(recording).model_dump(by_alias=True)

    assert payload['type'] == 'session'
    assert payload['songId'] == song.id
    assert payload['createdAt'] is not None


def test_create_recording_requires_existing_song(db) -> None:
    with pytest.raises(HTTPException) as exception_info:
        _create_recording(db, '0' * 32)

    assert exception_info.value.status_code == 404
    assert exception_info.value.detail == 'Song not found.'
    assert db.query(Recording).count() == 0


def test_recording_request_rejects_unknown_type() -> None:
    with pytest.raises(ValidationError):
        RecordingCreateRequest(songId='a' * 32, title='Take', audioUrl='take.m4a', type='outro')


def test_update_recording_changes_type(db, song) -> None:
    recording = _create_recording(db, song.id)

    updated = update_recording(recording_id=recording.id, data=RecordingUpdateRequest(type='break'), db=db)

    assert updated.recording_type == 'break'
    assert updated.title == 'Intro take'


def test_list_recordings_filters_by_song(db, song) -> None:
    other = Song(title='So What', artist='Miles Davis', audio_file='so-what.mp3')
    db.add(other)
    db.commit()
    _create_recording(db, song.id)
    _create_recording(db, other.id, title='Other take')

    recordings = list_recordings(song_id=song.id, db=db)

    assert [recording.title for recording in recordings] == ['Intro take']
    assert len(list_recordings(song_id=None, db=db)) == 2


def test_deleting_song_keeps_its_recordings_and_chord_notes(db, song) -> None:
    recording = _create_recording(db, song.id)
    create_chord_note(
        data=ChordNoteCreateRequest(songId=song.id, chordProgression='Bbmaj7 A7 Dm7'),
        current_user=None,
        db=db,
    )

    delete_song(song_id=song.id, db=db)

    assert get_recording(recording_id=recording.id, db=db).song_id == song.id
    assert db.query(ChordNote).count() == 1


def test_chord_note_crud(db, song, make_user) -> None:
    user = make_user()
    chord_note = create_chord_note(
        data=ChordNoteCreateRequest(songId=song.id, chordProgression='Dm7 G7 Cmaj7', position=12),
        current_user=user,
        db=db,
    )
    assert chord_note.created_by == user.id

    updated = update_chord_note(
        chord_note_id=chord_note.id,
        data=ChordNoteUpdateRequest(notes='  ii-V-I  '),
        db=db,
    )
    assert updated.notes == 'ii-V-I'
    assert updated.position == 12
    assert len(list_chord_notes(song_id=song.id, db=db)) == 1

    delete_chord_note(chord_note_id=chord_note.id, db=db)
    assert db.query(ChordNote).count() == 0


def test_chord_note_request_rejects_negative_position() -> None:
    with pytest.raises(ValidationError):
        ChordNoteCreateRequest(songId='a' * 32, chordProgression='C', position=-1)
