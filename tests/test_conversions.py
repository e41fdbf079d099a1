import pytest

from rustdrill.drills.conversions import (
    Color,
    IntoColorError,
    ParsePersonError,
    Person,
    average,
    byte_counter,
    char_counter,
    parse_person,
    person_from_text,
)


# --- byte and character counts ---


def test_different_counts():
    s = "Café au lait"
    assert char_counter(s) != byte_counter(s)
    assert byte_counter(s) == char_counter(s) + 1


def test_same_counts():
    s = "Cafe au lait"
    assert char_counter(s) == byte_counter(s)


def test_empty_counts():
    assert byte_counter("") == char_counter("") == 0


# --- average ---


def test_returns_proper_type_and_value():
    assert average([3.5, 0.3, 13.0, 11.7]) == 7.125


def test_average_accepts_generator():
    assert average(x for x in [3.5, 0.3, 13.0, 11.7]) == 7.125


def test_average_of_empty_is_nan():
    result = average([])
    assert str(result) == "nan"


# --- person_from_text (falls back to the default) ---


def test_default():
    dp = Person()
    assert dp.name == "John"
    assert dp.age == 30


def test_good_convert():
    p = person_from_text("Mark,20")
    assert p.name == "Mark"
    assert p.age == 20


@pytest.mark.parametrize(
    "text",
    [
        "",
        "Mark,twenty",
        "Mark",
        "Mark,",
        ",1",
        ",",
        ",one",
        "Mike,32,",
        "Mike,32,man",
    ],
)
def test_bad_input_gives_default(text):
    p = person_from_text(text)
    assert p.name == "John"
    assert p.age == 30


def test_negative_age_gives_default():
    assert person_from_text("Mark,-20") == Person()


# --- parse_person (strict) ---


def test_empty_input():
    with pytest.raises(ParsePersonError) as info:
        parse_person("")
    assert info.value.kind is ParsePersonError.Kind.EMPTY


def test_good_input():
    p = parse_person("John,32")
    assert p.name == "John"
    assert p.age == 32


@pytest.mark.parametrize("text", ["John,", "John,twenty"])
def test_bad_age(text):
    with pytest.raises(ParsePersonError) as info:
        parse_person(text)
    assert info.value.kind is ParsePersonError.Kind.PARSE_INT
    assert isinstance(info.value.__cause__, ValueError)


@pytest.mark.parametrize("text", ["John", "John,32,", "John,32,man"])
def test_bad_len(text):
    with pytest.raises(ParsePersonError) as info:
        parse_person(text)
    assert info.value.kind is ParsePersonError.Kind.BAD_LEN


@pytest.mark.parametrize("text", [",1", ",", ",one"])
def test_missing_name(text):
    with pytest.raises(ParsePersonError) as info:
        parse_person(text)
    assert info.value.kind in (
        ParsePersonError.Kind.NO_NAME,
        ParsePersonError.Kind.PARSE_INT,
    )


def test_missing_name_exact():
    with pytest.raises(ParsePersonError) as info:
        parse_person(",1")
    assert info.value.kind is ParsePersonError.Kind.NO_NAME


@pytest.mark.parametrize("age", ["-1", " 3", "1_0", "3.0"])
def test_age_rejects_non_digits(age):
    with pytest.raises(ParsePersonError) as info:
        parse_person(f"John,{age}")
    assert info.value.kind is ParsePersonError.Kind.PARSE_INT


def test_strict_and_lenient_agree_on_good_input():
    assert parse_person("Mark,20") == person_from_text("Mark,20")


# --- Color ---


@pytest.mark.parametrize(
    "values",
    [
        (256, 1000, 10000),
        (-1, -10, -256),
        (-1, 255, 255),
        [1000, 10000, 256],
        [-10, -256, -1],
        [-1, 255, 255],
        [10000, 256, 1000],
        [-256, -1, -10],
    ],
)
def test_out_of_range(values):
    with pytest.raises(IntoColorError) as info:
        Color.from_sequence(values)
    assert info.value.kind is IntoColorError.Kind.INT_CONVERSION


@pytest.mark.parametrize("values", [(183, 65, 14), [183, 65, 14]])
def test_correct(values):
    assert Color.from_sequence(values) == Color(red=183, green=65, blue=14)


@pytest.mark.parametrize("values", [[0, 0, 0, 0], [0, 0], []])
def test_bad_length(values):
    with pytest.raises(IntoColorError) as info:
        Color.from_sequence(values)
    assert info.value.kind is IntoColorError.Kind.BAD_LEN


def test_length_checked_before_range():
    with pytest.raises(IntoColorError) as info:
        Color.from_sequence([1000, 1000])
    assert info.value.kind is IntoColorError.Kind.BAD_LEN


def test_boundaries_accepted():
    c = Color.from_sequence([0, 255, 0])
    assert (c.red, c.green, c.blue) == (0, 255, 0)


def test_non_integer_component_rejected():
    with pytest.raises(TypeError):
        Color.from_sequence([1.5, 2, 3])