from quiniela.parsing.segmenter import find_section_marker, segment_lines


def test_starts_after_section_marker(tables):
    segmentation = segment_lines("LA QUINIELA\nJORNADA 12\nGetafe - Osasuna", tables)
    assert segmentation.start_index == 2
    assert segmentation.lines[2] == "Getafe - Osasuna"


def test_offsets_point_at_line_starts(tables):
    normalized = "LA QUINIELA\nJORNADA 12\nGetafe - Osasuna"
    segmentation = segment_lines(normalized, tables)
    assert segmentation.offsets == [0, 12, 23]
    for line, offset in zip(segmentation.lines, segmentation.offsets):
        assert normalized[offset : offset + len(line)] == line


def test_ordinal_marker_forms():
    assert find_section_marker(["PRONOSTICO", "12ª JORNADA", "Betis - Celta"]) == 1
    assert find_section_marker(["J. 7", "Betis - Celta"]) == 0
    assert find_section_marker(["Jornada Nº 31"]) == 0


def test_skips_past_last_banner_line(tables):
    segmentation = segment_lines(
        "QUINIELA\nDIA/HORA 1X2 PART.\n1. Getafe - Osasuna\n2. Betis - Celta", tables
    )
    assert segmentation.start_index == 2


def test_match_row_with_banner_token_is_not_a_banner(tables):
    segmentation = segment_lines("1 GETAFE - OSASUNA 1X2\n2 BETIS - CELTA", tables)
    assert segmentation.start_index == 0


def test_marker_far_down_is_a_footer(tables):
    lines = [f"{i}. Equipo{chr(64 + i)} - Rival{chr(64 + i)}" for i in range(1, 13)]
    lines.append("Próxima jornada 13")
    segmentation = segment_lines("\n".join(lines), tables)
    assert segmentation.start_index == 0


def test_no_header_starts_at_zero(tables):
    assert segment_lines("Getafe - Osasuna", tables).start_index == 0
