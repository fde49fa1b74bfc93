# Listing platforms and the CDN patterns their galleries are served from.
CDN_PATTERNS = (
    "photos.zillowstatic.com (look for filenames ending in _p_f.jpg or _p_h.jpg)",
    "ssl.cdn-redfin.com/photo/",
    "ar.rdcpix.com/ (Realtor.com)",
    "images.kw.com",
    "photos.estately.net",
)

PLATFORMS = ("Zillow", "Redfin", "Realtor.com", "Trulia", "Compass", "Estately")

MIN_UNIQUE_IMAGES = 20


def build_prompt(listing: str) -> str:
    """Fixed investigator instruction for one listing URL or street address."""
    patterns = "\n".join(f"       - {p}" for p in CDN_PATTERNS)
    return f"""
    INSTRUCTION: You are a professional Real Estate Data Investigator.
    OBJECTIVE: Locate and return the MAXIMUM number of high-resolution property images for this listing: {listing.strip()}

    REASONING STEPS:
    1. EXTRACT ADDRESS: From the URL, determine the physical street address, city, and state.
    2. MULTI-SITE SEARCH: Do not rely solely on the provided URL. Search Google for "[Address] gallery", "[Address] listing photos", and "[Address] interior photos".
    3. CDN DISCOVERY: Look across {", ".join(PLATFORMS)}.
    4. FIND DIRECT ASSETS: Specifically look for image URLs hosted on CDNs (Content Delivery Networks).
       Patterns to target:
{patterns}
    5. IMAGE SET COMPLETION: Real estate listings often have 30-50 photos. Your goal is to find at least {MIN_UNIQUE_IMAGES} unique high-quality links.
    6. FILTERING: Remove any links that lead to maps, street views, agent headshots, or platform logos.

    CRITICAL: Many platforms block direct bot access to the URL. Use Google Search grounding to find the "publicly accessible" versions of these images which are often indexed in Google Images or on secondary listing sites.

    RETURN JSON ONLY.
    """
