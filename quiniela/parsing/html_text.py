import re

from bs4 import BeautifulSoup

# Elements that end a visual row on the results page
ROW_TAGS = ["tr", "li", "div", "p", "h1", "h2", "h3", "h4", "h5", "h6", "table", "section"]
CELL_TAGS = ["td", "th", "span"]


def html_to_text(html: str) -> str:
    """Collapses results-page markup to text with one visual row per line.

    Scripts and styles are dropped, row-like elements end a line, cells are
    kept apart by a space and entities come back decoded (``&ndash;`` turns
    into a real dash for the normalizer).
    """
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript", "template"]):
        tag.decompose()
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for cell in soup.find_all(CELL_TAGS):
        cell.append(" ")
    for row in soup.find_all(ROW_TAGS):
        row.append("\n")

    text = soup.get_text()
    lines = (re.sub(r"[^\S\n]+", " ", line).strip() for line in text.split("\n"))
    return "\n".join(line for line in lines if line)
