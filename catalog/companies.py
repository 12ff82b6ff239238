"""Firms with a dedicated practice question set."""
from __future__ import annotations

from typing import Dict, Optional

from .models import Company

COMPANIES: Dict[str, Company] = {
    c.slug: c
    for c in (
        Company(slug="mckinsey", name="McKinsey & Company", description="Interviewer-led cases with drilled-down exhibits."),
        Company(slug="bcg", name="Boston Consulting Group", description="Candidate-led cases that reward creative structures."),
        Company(slug="bain", name="Bain & Company", description="Candidate-led cases with a results-first culture."),
        Company(slug="deloitte", name="Deloitte Consulting"),
        Company(slug="accenture", name="Accenture"),
        Company(slug="kearney", name="Kearney"),
        Company(slug="oliver-wyman", name="Oliver Wyman"),
        Company(slug="roland-berger", name="Roland Berger"),
        Company(slug="lek", name="L.E.K. Consulting"),
        Company(slug="strategy-and", name="Strategy&"),
        Company(slug="google", name="Google", track="product-management"),
        Company(slug="meta", name="Meta", track="product-management"),
        Company(slug="amazon", name="Amazon", track="product-management"),
    )
}


def get_company(slug: str) -> Optional[Company]:
    return COMPANIES.get((slug or "").strip().lower())


def company_name(slug: str) -> str:
    company = get_company(slug)
    if company is not None:
        return company.name
    return slug or "a leading firm"
