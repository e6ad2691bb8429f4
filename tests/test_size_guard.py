import pytest

from imagebox.errors import LengthRequired, MalformedRequest, RequestTooLarge
from imagebox.services.size_guard import check_content_length

LIMIT = 10 * 1024 * 1024


def test_lengths_up_to_the_limit_pass():
    assert check_content_length("0", LIMIT) == 0
    assert check_content_length(str(LIMIT), LIMIT) == LIMIT


def test_over_the_limit_is_too_large():
    with pytest.raises(RequestTooLarge) as exc:
        check_content_length(str(LIMIT + 1), LIMIT)
    assert exc.value.status_code == 413


def test_missing_header_requires_length():
    with pytest.raises(LengthRequired) as exc:
        check_content_length(None, LIMIT)
    assert exc.value.status_code == 411


@pytest.mark.parametrize("header", ["abc", "", "-1", "1.5"])
def test_garbage_header_is_malformed(header):
    with pytest.raises(MalformedRequest) as exc:
        check_content_length(header, LIMIT)
    assert exc.value.status_code == 400
