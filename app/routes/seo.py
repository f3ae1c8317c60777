from fastapi import APIRouter, Request
from fastapi.responses import Response
from datetime import datetime

router = APIRouter()

# (path, changefreq, priority) of every public page
PUBLIC_PAGES = [
    ("/", "weekly", "1.0"),
    ("/pricing", "weekly", "0.8"),
    ("/request", "monthly", "0.7"),
    ("/clienthub", "monthly", "0.5"),
]

PRIVATE_PREFIXES = ["/admin/", "/api/", "/requestdetail", "/request/"]


@router.get("/sitemap.xml", response_class=Response)
async def sitemap_xml(request: Request):
    """Sitemap of the public pages."""
    base_url = str(request.base_url).rstrip('/')
    current_date = datetime.now().strftime('%Y-%m-%d')

    urls = "".join(
        f"""
    <url>
        <loc>{base_url}{path}</loc>
        <lastmod>{current_date}</lastmod>
        <changefreq>{changefreq}</changefreq>
        <priority>{priority}</priority>
    </url>"""
        for path, changefreq, priority in PUBLIC_PAGES
    )
    sitemap_content = f"""<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{urls}
</urlset>"""

    return Response(
        content=sitemap_content,
        media_type="application/xml"
    )


@router.get("/robots.txt", response_class=Response)
async def robots_txt(request: Request):
    """Crawler rules: public pages allowed, back office and per-request pages hidden."""
    base_url = str(request.base_url).rstrip('/')

    allow = "\n".join(f"Allow: {path}" for path, _, _ in PUBLIC_PAGES)
    disallow = "\n".join(f"Disallow: {prefix}" for prefix in PRIVATE_PREFIXES)
    robots_content = f"""User-agent: *
{allow}

# Disallow back office, API and per-request pages
{disallow}

# Sitemap location
Sitemap: {base_url}/sitemap.xml
"""

    return Response(
        content=robots_content,
        media_type="text/plain"
    )
