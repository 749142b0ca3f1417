"""Extract title, meta description, headings and image alt coverage."""

from ..document import ParsedDocument
from ..models import PageMeta


def extract_meta(doc: ParsedDocument) -> PageMeta:
    """Collect the on-page metadata the report and issue rules need.

    Images count as missing alt text when the attribute is absent or blank.
    """
    soup = doc.soup

    # Title
    title_tag = soup.find("title")
    title = title_tag.get_text(strip=True) if title_tag else ""

    # Meta description
    desc_tag = soup.find("meta", attrs={"name": "description"})
    description = (desc_tag.get("content") or "").strip() if desc_tag else ""

    # Headings
    h1 = [h.get_text(" ", strip=True) for h in soup.find_all("h1")]
    h2 = [h.get_text(" ", strip=True) for h in soup.find_all("h2")]

    # Images
    images = soup.find_all("img")
    missing_alt = [
        img.get("src") or "(no src)"
        for img in images
        if not (img.get("alt") or "").strip()
    ]

    return PageMeta(
        title=title,
        meta_description=description,
        h1=h1,
        h2=h2,
        images_total=len(images),
        images_missing_alt=missing_alt,
    )
