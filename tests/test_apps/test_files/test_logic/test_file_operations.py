"""Tests for file operations business logic."""

import io

import pytest

from server.apps.authentication.tokens import CallerIdentity
from server.apps.core.exceptions import (
    InvalidRequestError,
    NotFoundError,
    SystemFailureError,
)
from server.apps.files.models import File, FileUpload


def _upload(name: str, content: bytes) -> FileUpload:
    return FileUpload(name=name, size=len(content), reader=io.BytesIO(content))


def test_create_file_derives_identifier(file_service, caller, sample_upload):
    """Test upload is turned into a content-addressed file."""
    file = file_service.create_file('n1', sample_upload, caller=caller)

    assert file == File.derive('test.txt', 17, b'test file content')


def test_create_then_get_round_trip(file_service, caller):
    """Test stored file is returned unchanged."""
    content = b'\x00\x01binary\xff'
    created = file_service.create_file(
        'n1',
        _upload('a.txt', content),
        caller=caller,
    )

    fetched = file_service.get_file(
        'n1',
        File.derive('a.txt', len(content), content).id,
        caller=caller,
    )

    assert fetched.id == created.id
    assert fetched.name == 'a.txt'
    assert fetched.content == content


def test_create_twice_single_object(file_service, caller):
    """Test identical uploads leave exactly one file."""
    file_service.create_file('n1', _upload('a.txt', b'B'), caller=caller)
    file_service.create_file('n1', _upload('a.txt', b'B'), caller=caller)

    files = file_service.list_files('n1', caller=caller)

    assert len(files) == 1
    assert files[0].content == b'B'


def test_list_empty_note_not_found(file_service, caller):
    """Test a note never uploaded to is not found, not empty."""
    with pytest.raises(NotFoundError):
        file_service.list_files('empty-note-never-uploaded-to', caller=caller)


def test_delete_then_get(file_service, caller):
    """Test deleted file is gone and a second delete is harmless."""
    file = file_service.create_file(
        'n1',
        _upload('a.txt', b'B'),
        caller=caller,
    )

    file_service.delete_file('n1', file.id, caller=caller)

    with pytest.raises(SystemFailureError):
        file_service.get_file('n1', file.id, caller=caller)
    file_service.delete_file('n1', file.id, caller=caller)


@pytest.mark.parametrize(('note_id', 'file_id'), [
    ('', 'file-id'),
    ('n1', ''),
])
def test_get_requires_identifiers(file_service, caller, note_id, file_id):
    """Test missing identifiers are rejected before storage is hit."""
    with pytest.raises(InvalidRequestError):
        file_service.get_file(note_id, file_id, caller=caller)


@pytest.mark.parametrize(('note_id', 'file_id'), [
    ('', 'file-id'),
    ('n1', ''),
])
def test_delete_requires_identifiers(file_service, caller, note_id, file_id):
    """Test delete rejects missing identifiers."""
    with pytest.raises(InvalidRequestError):
        file_service.delete_file(note_id, file_id, caller=caller)


def test_list_requires_note(file_service, caller):
    """Test listing without a note is rejected."""
    with pytest.raises(InvalidRequestError, match='note_uuid'):
        file_service.list_files('', caller=caller)


def test_create_requires_note(file_service, caller, sample_upload):
    """Test uploads need a note."""
    with pytest.raises(InvalidRequestError, match='note_uuid'):
        file_service.create_file('', sample_upload, caller=caller)

    assert sample_upload.reader.tell() == 0


def test_storage_errors_pass_through(file_service, caller, monkeypatch):
    """Test storage failures reach the caller unchanged."""
    error = SystemFailureError('store down')

    def create_file(note_id, file):
        raise error

    monkeypatch.setattr(file_service.storage, 'create_file', create_file)

    with pytest.raises(SystemFailureError) as exc_info:
        file_service.create_file('n1', _upload('a.txt', b'B'), caller=caller)

    assert exc_info.value is error


def test_any_caller_may_access_any_note(file_service):
    """Test files are not restricted to the uploading caller."""
    owner = CallerIdentity(subject='owner')
    stranger = CallerIdentity(subject='stranger')
    file = file_service.create_file(
        'n1',
        _upload('a.txt', b'B'),
        caller=owner,
    )

    assert file_service.get_file('n1', file.id, caller=stranger) == file
