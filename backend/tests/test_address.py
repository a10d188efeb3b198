import pytest

from intake.services.address import (
    extract_district_and_subdistrict,
    normalize_address,
    normalize_phone,
    normalize_status,
    parse_price,
    region_key,
)
from intake.services.regions import Granularity


def test_normalize_address_example():
    assert normalize_address("서울특별시 강남구 역삼동 123 - 4.") == "서울시 강남구 역삼동 123-4"


def test_normalize_address_matches_spelling_variants():
    a = normalize_address("대한민국 부산광역시  해운대구, 우동 10-2")
    b = normalize_address("부산시 해운대구 우동 10 - 2")
    assert a == b == "부산시 해운대구 우동 10-2"


def test_country_words_only_removed_as_whole_words():
    assert normalize_address("한국 서울 한국빌딩") == "서울 한국빌딩"


def test_lowercased_and_none_is_empty():
    assert normalize_address("Seoul GANGNAM-gu") == "seoul gangnam-gu"
    assert normalize_address("Straße 5") == "straße 5"
    assert normalize_address(None) == ""


@pytest.mark.parametrize(
    "raw",
    [
        "서울특별시 강남구 역삼동 123 - 4.",
        "  대한민국 ,  인천광역시 . 남동구  ",
        "한국 - 한국",
        "특별특별시시",
        "a . b , c",
        "",
        "ABC   -   def",
    ],
)
def test_normalize_address_idempotent(raw):
    once = normalize_address(raw)
    assert normalize_address(once) == once


def test_extract_district_and_subdistrict_example():
    assert extract_district_and_subdistrict("서울특별시 강남구 역삼동 123-4") == ("강남구", "역삼동")


def test_extract_takes_first_match_and_rural_suffixes():
    assert extract_district_and_subdistrict("경기도 양평군 양평읍 12") == ("", "양평읍")
    assert extract_district_and_subdistrict("수원시 팔달구 인계동 권선구") == ("팔달구", "인계동")
    assert extract_district_and_subdistrict("") == ("", "")


def test_region_key():
    assert region_key(Granularity.SUBDISTRICT, "강남구", "역삼동") == "강남구 역삼동"
    assert region_key(Granularity.SUBDISTRICT, "", "역삼동") == "역삼동"
    assert region_key(Granularity.SUBDISTRICT, "강남구", "") == "강남구"
    assert region_key(Granularity.DISTRICT, " 강남구 ", "역삼동") == "강남구"
    assert region_key("subdistrict", "강남구 ", "  역삼동") == "강남구 역삼동"


def test_small_normalizers():
    assert normalize_phone("010-1234-5678") == "01012345678"
    assert normalize_status("진행중") == "active"
    assert normalize_status("보류") == "hold"
    assert normalize_status("완료") == "closed"
    assert normalize_status("whatever") == "review"
    assert parse_price("1,250,000,000원") == 1250000000
    assert parse_price("") == 0
