"""
Unit tests for comparison request parsing.
"""

import pytest
from dedupifyr.errors import InvalidRequestShapeError, PathNotFoundError
from dedupifyr.request import (
    DirectoryRequest,
    PairRequest,
    SingleRequest,
    parse_request,
)


class TestParseRequest:
    """Test parse_request function."""

    def test_directory(self, temp_dir):
        request = parse_request(str(temp_dir))
        assert isinstance(request, DirectoryRequest)
        assert request.directory_path == str(temp_dir)
        assert request.kind == 'directory'

    def test_directory_quoted(self, temp_dir):
        request = parse_request(f'  "{temp_dir}"  ')
        assert isinstance(request, DirectoryRequest)
        assert request.directory_path == str(temp_dir)

    def test_single(self, sample_images, temp_dir):
        request = parse_request(f"{sample_images['unique']}, {temp_dir}")
        assert isinstance(request, SingleRequest)
        assert request.image_path == sample_images['unique']
        assert request.directory_path == str(temp_dir)

    def test_pair(self, sample_images):
        request = parse_request(f"{sample_images['identical1']},{sample_images['unique']}")
        assert isinstance(request, PairRequest)
        assert request.first_image_path == sample_images['identical1']
        assert request.second_image_path == sample_images['unique']

    def test_raw_input_kept(self, temp_dir):
        request = parse_request(f"{temp_dir}  ")
        assert request.raw == str(temp_dir)

    def test_paths_resolved_at_construction(self, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        (temp_dir / "sub").mkdir()
        request = parse_request("sub")
        assert request.directory_path == str(temp_dir / "sub")

    def test_single_file_alone_is_invalid(self, sample_images):
        with pytest.raises(InvalidRequestShapeError):
            parse_request(sample_images['unique'])

    def test_directory_and_directory_is_invalid(self, temp_dir):
        other = temp_dir / "other"
        other.mkdir()
        with pytest.raises(InvalidRequestShapeError):
            parse_request(f"{temp_dir},{other}")

    def test_directory_then_file_is_invalid(self, sample_images, temp_dir):
        with pytest.raises(InvalidRequestShapeError):
            parse_request(f"{temp_dir},{sample_images['unique']}")

    def test_three_tokens_is_invalid(self, sample_images):
        raw = ",".join([sample_images['identical1'], sample_images['identical2'], sample_images['unique']])
        with pytest.raises(InvalidRequestShapeError):
            parse_request(raw)

    def test_empty_token_is_invalid(self, sample_images):
        with pytest.raises(InvalidRequestShapeError):
            parse_request(f"{sample_images['unique']},")

    def test_same_file_twice_is_invalid(self, sample_images):
        with pytest.raises(InvalidRequestShapeError):
            parse_request(f"{sample_images['unique']},{sample_images['unique']}")

    def test_nonexistent_path(self, temp_dir):
        with pytest.raises(PathNotFoundError) as excinfo:
            parse_request(str(temp_dir / "missing"))
        assert "missing" in str(excinfo.value)

    def test_nonexistent_path_is_invalid_shape(self, sample_images, temp_dir):
        with pytest.raises(InvalidRequestShapeError):
            parse_request(f"{sample_images['unique']},{temp_dir / 'missing.png'}")
