import pytest
from config import PathConfig
from core.naming.name_accumulator import NameAccumulator
from core.naming.name_sources import (
    LineKind,
    NameDataError,
    insert_ascii_names,
    parse_ascii_nametable,
    process_line,
    read_names,
    split_name_line
)


def accumulated(names: NameAccumulator):
    return {token: "".join(chars) for token, chars in names.iter_sorted()}


@pytest.fixture(scope="module")
def entries():
    with open(PathConfig.get_ascii_nametable(), "r", encoding="utf-8") as f:
        return parse_ascii_nametable(f)


class TestProcessLine:

    @pytest.mark.parametrize("line", ["# this is a comment", "", "    "])
    def test_non_data_skipped(self, line):
        names = NameAccumulator()
        assert process_line(names, line) == (LineKind.NONE, None)
        assert len(names) == 0

    def test_current_and_unicode_1_names(self):
        names = NameAccumulator()
        line = "03BB;GREEK SMALL LETTER LAMDA;Ll;0;L;;;;;N;GREEK SMALL LETTER LAMBDA;;039B;;039B"
        assert process_line(names, line) == (LineKind.SIMPLE, None)
        assert accumulated(names) == {
            "greek": "λ",
            "greek small letter lamda": "λ",
            "lamda": "λ",
            "greek small letter lambda": "λ",
            "lambda": "λ",
        }

    def test_aliases_and_data_lines(self):
        names = NameAccumulator()
        for line in [
            "0091;PRIVATE USE ONE;control",
            "0092;PRIVATE USE TWO;control",
            "0005;ENQUIRY;control",
            "200D;ZWJ;abbreviation",
            "00AE;REGISTERED SIGN;So;0;ON;;;;;N;REGISTERED TRADE MARK SIGN;;;;",
            "0214;LATIN CAPITAL LETTER U WITH DOUBLE GRAVE;Lu;0;L;0055 030F;;;;N;;;;0215;",
        ]:
            assert process_line(names, line) == (LineKind.SIMPLE, None)

        assert process_line(
            names, "3400;<CJK Ideograph Extension A, First>;Lo;0;L;;;;;N;;;;;"
        ) == (LineKind.BLOCK_START, 0x3400)
        assert process_line(
            names, "4DB5;<CJK Ideograph Extension A, Last>;Lo;0;L;;;;;N;;;;;"
        ) == (LineKind.BLOCK_END, 0x4DB5)

        assert accumulated(names) == {
            "capital": "\u0214",
            "double": "\u0214",
            "enquiry": "\u0005",
            "grave": "\u0214",
            "latin": "\u0214",
            "latin capital letter u with double grave": "\u0214",
            "one": "\u0091",
            "two": "\u0092",
            "private": "\u0091\u0092",
            "use": "\u0091\u0092",
            "private use one": "\u0091",
            "private use two": "\u0092",
            "registered": "®",
            "trade": "®",
            "mark": "®",
            "registered sign": "®",
            "registered trade mark sign": "®",
            "zwj": "\u200d",
        }

    def test_bad_hex_field(self):
        with pytest.raises(NameDataError, match="base-16"):
            process_line(NameAccumulator(), "XYZ;BROKEN;So")

    def test_surrogate_code_point_skipped(self):
        names = NameAccumulator()
        assert process_line(names, "D800;<Non Private Use High Surrogate, First>;Cs") == (LineKind.NONE, None)
        assert len(names) == 0


class TestReadNames:

    def test_block_expanded_through_unicodedata(self):
        names = NameAccumulator()
        read_names(names, [
            "3400;<CJK Ideograph Extension A, First>;Lo;0;L;;;;;N;;;;;",
            "3402;<CJK Ideograph Extension A, Last>;Lo;0;L;;;;;N;;;;;",
        ])
        assert names.get("cjk unified ideograph-3401") == {"\u3401"}
        assert names.get("cjk") == {"\u3400", "\u3401", "\u3402"}
        assert names.get("3402") == {"\u3402"}

    def test_unterminated_block(self):
        with pytest.raises(NameDataError, match="premature end"):
            read_names(NameAccumulator(), [
                "3400;<CJK Ideograph Extension A, First>;Lo;0;L;;;;;N;;;;;",
            ], source="UnicodeData.txt")

    def test_block_start_followed_by_other_line(self):
        with pytest.raises(NameDataError, match=r"UnicodeData.txt:2"):
            read_names(NameAccumulator(), [
                "3400;<CJK Ideograph Extension A, First>;Lo;0;L;;;;;N;;;;;",
                "0041;LATIN CAPITAL LETTER A;Lu;0;L;;;;;N;;;;0061;",
            ], source="UnicodeData.txt")

    def test_block_end_without_start(self):
        with pytest.raises(NameDataError, match="without a start"):
            read_names(NameAccumulator(), [
                "4DB5;<CJK Ideograph Extension A, Last>;Lo;0;L;;;;;N;;;;;",
            ])

    def test_error_names_line_number(self):
        with pytest.raises(NameDataError, match=r"aliases:3"):
            read_names(NameAccumulator(), [
                "# comment",
                "0041;LATIN CAPITAL LETTER A;Lu",
                "ZZZZ;NOT HEX;Lu",
            ], source="aliases")


class TestAsciiNametable:

    @pytest.mark.parametrize("line,expected", [
        (' "Shift In", "Locking Shift 0",', ["Shift In", "Locking Shift 0"]),
        ('"\\\\v",', ["\\v"]),
        ('"\\"",', ['"']),
        ('",",', [","]),
    ])
    def test_split_name_line(self, line, expected):
        assert split_name_line(line) == expected

    def test_shipped_table_has_every_code_point(self, entries):
        assert len(entries) == 128
        assert [entry.value for entry in entries] == [chr(i) for i in range(128)]

    def test_mnemonics_synonyms_and_note(self, entries):
        quote = entries[ord('"')]
        assert quote.mnemonics == ['"']
        assert "Double Quote" in quote.synonyms
        assert "&quot;" in quote.synonyms
        assert quote.note == "See ' and ` for matching names."

        tab = entries[9]
        assert tab.mnemonics == ["HT", "TAB", "\\t", "^I"]
        assert tab.called == ["HT", "TAB", "\\t", "^I"]
        assert entries[ord("A")].called == []

    def test_inserted_names_are_searchable(self, entries):
        names = NameAccumulator()
        insert_ascii_names(names, entries)
        assert names.get("octothorpe") == {"#"}
        assert names.get("ht") == {"\t"}
        # "Horizontal Tab" and "Vertical Tab" share a word
        assert names.get("tab") == {"\t", "\x0b"}
        assert names.get("del") == {"\x7f"}
        # Single-letter mnemonics only survive as whole names
        assert names.get("a") == {"A", "a"}

    def test_short_table_rejected(self):
        with pytest.raises(NameDataError, match="expected 128"):
            parse_ascii_nametable(['Mnemonics: "NUL",', "%%"], source="tiny")
