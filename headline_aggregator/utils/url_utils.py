from urllib.parse import urldefrag, urljoin, urlparse


def extract_domain(url: str) -> str:
    parsed = urlparse(url)
    return parsed.netloc


def to_absolute_url(href: str, base_url: str) -> str:
    """Resolve site-relative hrefs against the site origin and drop fragments."""
    href = href.strip()
    if href.startswith('/'):
        href = urljoin(base_url.rstrip('/') + '/', href)
    url, _fragment = urldefrag(href)
    return url


def feed_name_from_url(url: str) -> str:
    path = urlparse(url).path.rstrip('/')
    name = path.rsplit('/', 1)[-1]
    return name or extract_domain(url)
