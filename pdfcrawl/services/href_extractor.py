from typing import List

from bs4 import BeautifulSoup


class HrefExtractor:
    """Pull raw href attribute values out of rendered HTML."""

    def extract_hrefs(self, html: str) -> List[str]:
        if not html:
            return []
        soup = BeautifulSoup(html, "html.parser")
        hrefs = []
        for element in soup.find_all(href=True):
            href = element.get("href")
            if isinstance(href, str) and href.strip():
                hrefs.append(href)
        return hrefs
