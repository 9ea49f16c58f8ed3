from quiniela.models.enums import Outcome1X2, PlenoGoals
from quiniela.models.results import PlenoResult
from quiniela.parsing.results_parser import extract_results_from_fragment, parse_results_by_jornada

SIGNS_30 = list("1X21X21X21X21X")
SIGNS_29 = list("XX1122X1X2X1X1")


def result_cells(signs):
    return "".join(f'<span class="resultado">{sign}</span>' for sign in signs)


def quoted_signs(signs):
    return "<div data-signs='[" + ",".join(f'"{sign}"' for sign in signs) + "]'></div>"


def test_sections_are_read_per_jornada():
    html = (
        "<h2>Jornada 30</h2>"
        + result_cells(SIGNS_30)
        + "<p>Pleno al 15: 2-M</p>"
        + "<h2>Jornada 29</h2>"
        + quoted_signs(SIGNS_29)
        + "<p>Pleno: M - 0</p>"
        + "<h2>Jornada 28</h2><p>Sin datos</p>"
    )
    results = parse_results_by_jornada(html)
    assert [r.number for r in results] == [30, 29]
    assert results[0].result_1x2 == [Outcome1X2(sign) for sign in SIGNS_30]
    assert results[0].pleno_15 == PlenoResult(home=PlenoGoals.TWO, away=PlenoGoals.MORE)
    assert results[1].result_1x2 == [Outcome1X2(sign) for sign in SIGNS_29]
    assert results[1].pleno_15 == PlenoResult(home=PlenoGoals.MORE, away=PlenoGoals.ZERO)


def test_page_without_headers_is_latest_jornada():
    results = parse_results_by_jornada(result_cells(SIGNS_30))
    assert len(results) == 1
    assert results[0].number == 0
    assert results[0].pleno_15 is None


def test_extra_signs_keep_first_fourteen():
    results = extract_results_from_fragment(result_cells(SIGNS_30 + ["2", "2"]))
    assert len(results.result_1x2) == 14


def test_too_few_signs_means_no_1x2():
    results = extract_results_from_fragment(result_cells(SIGNS_30[:10]))
    assert results.result_1x2 is None
    assert not results.has_data


def test_lowercase_signs_and_goals():
    results = extract_results_from_fragment(
        result_cells([s.lower() for s in SIGNS_30]) + "<td>pleno 1 - m</td>"
    )
    assert results.result_1x2[1] == Outcome1X2.DRAW
    assert results.pleno_15 == PlenoResult(home=PlenoGoals.ONE, away=PlenoGoals.MORE)


def test_out_of_range_jornada_numbers_are_ignored():
    html = "<h2>Jornada 75</h2>" + result_cells(SIGNS_30)
    results = parse_results_by_jornada(html)
    assert [r.number for r in results] == [0]


def test_empty_page():
    assert parse_results_by_jornada("") == []


def test_overlong_jornada_numbers_are_not_headers():
    assert parse_results_by_jornada("JORNADA " + "9" * 5000) == []
    html = "<h2>Jornada " + "9" * 5000 + "</h2><h2>Jornada 30</h2>" + result_cells(SIGNS_30)
    assert [r.number for r in parse_results_by_jornada(html)] == [30]
