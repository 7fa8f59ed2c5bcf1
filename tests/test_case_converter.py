import pytest

from ecole.utils.case_converter import CaseConverter, CaseType, InvalidInputError, convert_case, split_words


def test_snake_rows_become_camel_records():
    row = {
        "id_number": "A0000001",
        "first_name": "first_name",
        "classroom": {"main_teacher_id": None},
        "attendances": [{"from_time": "08:00"}, "plain_value"],
    }

    record = convert_case(row, CaseType.CAMEL)

    assert record == {
        "idNumber": "A0000001",
        "firstName": "first_name",
        "classroom": {"mainTeacherId": None},
        "attendances": [{"fromTime": "08:00"}, "plain_value"],
    }


def test_camel_snake_round_trip_restores_keys():
    row = {"date_of_birth": "2012-03-14", "parent_id": None, "avatar_url": "a.png"}

    back = convert_case(convert_case(row, CaseType.CAMEL), CaseType.SNAKE)

    assert back == row


def test_snake_camel_round_trip_restores_camel_keys():
    record = {"idNumber": 1, "classroomName": {"mainTeacherId": 2}}

    assert convert_case(convert_case(record, CaseType.SNAKE), CaseType.CAMEL) == record


@pytest.mark.parametrize("target", list(CaseType))
def test_conversion_is_idempotent(target):
    once = convert_case({"created_at": 1, "schoolId": 2, "main-teacher-id": 3}, target)

    assert convert_case(once, target) == once


@pytest.mark.parametrize(
    "target, expected",
    [
        (CaseType.KEBAB, "first-name"),
        (CaseType.PASCAL, "FirstName"),
        (CaseType.SCREAMING_SNAKE, "FIRST_NAME"),
        (CaseType.DOT, "first.name"),
        (CaseType.SNAKE, "first_name"),
    ],
)
def test_other_target_cases(target, expected):
    assert CaseConverter(target).convert_key("firstName") == expected


def test_uppercase_chunks_are_single_words():
    assert convert_case({"ID_NUMBER": 1}, CaseType.CAMEL) == {"idNumber": 1}


def test_consecutive_uppercase_handling():
    assert split_words("HTTPServer") == ["H", "T", "T", "P", "Server"]
    assert split_words("HTTPServer", preserve_consecutive_uppercase=True) == ["HTTP", "Server"]

    converter = CaseConverter(CaseType.SNAKE, preserve_consecutive_uppercase=True)
    assert converter.convert_key("userID") == "user_id"


def test_preserved_keys_are_left_alone():
    record = convert_case({"_id": 1, "first_name": 2}, CaseType.CAMEL, preserve_specific_keys=["_id"])

    assert record == {"_id": 1, "firstName": 2}


def test_empty_and_separator_only_keys_are_unchanged():
    assert convert_case({"": 1, "__": 2}, CaseType.CAMEL) == {"": 1, "__": 2}


@pytest.mark.parametrize("value", [[{"first_name": 1}], "first_name", None, 3])
def test_non_mapping_input_is_rejected(value):
    with pytest.raises(InvalidInputError):
        convert_case(value, CaseType.CAMEL)

    assert issubclass(InvalidInputError, TypeError)
