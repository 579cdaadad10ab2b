"""Keyword tables for the relevance and importance filters.

All entries are lower-case and matched as plain substrings.
"""

# Phrases that confirm an ambiguous keyword refers to telecommunications.
TELCO_INDICATORS = (
    "pldt", "globe telecom", "dito telecommunity", "dito telecoms",
    "converge ict", "smart communications",
    "telecommunications", "telecom", "telecoms",
    "mobile network", "broadband", "internet service provider", "isp",
    "5g network", "fiber network", "cellular",
    "dict", "ntc", "telco", "telcos",
)

SMART_FALSE_POSITIVES = (
    "smart meter", "smart grid", "smart city", "smart home",
    "smart device", "smart tv", "smart watch", "smart phone",
    "smart technology", "smart monitoring", "smart system",
    "smart economics", "smart solution", "smart app",
    "smart card", "be smart", "work smart", "smart choice",
)

# "dito" is Tagalog for "here".
DITO_FALSE_POSITIVES = (
    "dito sa", "dito ang", "dito na", "dito pa",
    "pumunta dito", "magtungo dito", "dumating dito",
)
DITO_TAGALOG_FOLLOWERS = frozenset({"sa", "ang", "na", "pa", "ay"})

GLOBE_FALSE_POSITIVES = (
    "vendée globe", "golden globe", "globe award",
    "around the globe", "across the globe", "globe trot",
)

CONVERGE_FALSE_POSITIVES = ("fiberxers", "fiber xers", "basketball", "pba")

VIDEO_DOMAINS = ("youtube.com", "youtu.be")

SPORTS_KEYWORDS = (
    "pba", "pvl", "uaap", "ncaa", "nba", "fiba",
    "basketball", "volleyball", "gilas",
    "traded", "debut", "match", "game", "score",
    "fiberxers", "high speed hitters", "tropang",
    "golden", "tournament", "championship", "playoffs",
    "injured", "injures", "triple-double", "season",
    "coach", "player", "team", "win", "loss", "defeat",
)

LOW_IMPORTANCE_KEYWORDS = (
    "promo", "sale", "discount", "voucher", "giveaway",
    "celebrity", "endorsement", "ambassador",
    "raffle", "contest", "prize",
    "csr", "charity", "donation", "scholarship",
    "award ceremony", "recognition event",
    "new plan", "price cut", "special offer",
    "bundle", "freebie", "limited time",
)

HIGH_IMPORTANCE_KEYWORDS = (
    # Infrastructure & investment
    "billion", "million", "investment", "capex",
    "infrastructure", "subsea cable", "fiber", "data center",
    "network expansion", "rollout", "deployment",
    # Regulatory & policy
    "dict", "ntc", "regulatory", "policy", "law",
    "spectrum", "license", "permit", "circular",
    # Technology
    "5g", "broadband", "satellite", "starlink",
    "cybersecurity", "breach", "hack", "outage",
    # Corporate & financial
    "merger", "acquisition", "partnership", "alliance",
    "earnings", "revenue", "profit", "quarterly",
    "stock", "ipo", "shares",
    # Service issues
    "disruption", "complaint", "npc",
    "data breach", "privacy", "security",
)

MAJOR_NEWS_DOMAINS = (
    "philstar.com", "mb.com.ph", "bworldonline.com",
    "rappler.com", "inquirer.net", "gmanetwork.com",
    "abs-cbn.com", "manilatimes.net", "manilabulletin.com",
    "newsbytes.ph", "bilyonaryo.com",
)

# Raw substring markers; "ad" also matches inside words such as "broadband".
AD_MARKERS = ("ad", "sponsored")

# Boolean query sent to the engagement-search API. Negative terms keep
# basketball/volleyball coverage of the telco-owned teams out.
TELCO_SEARCH_QUERY = (
    'telecom OR telecoms OR telecommunications OR dict OR ntc OR '
    '"globe telecom" OR "dito telecoms" OR "dito telecommunity" OR '
    '"converge ict" OR "smart communications" OR pldt OR "sky fiber" OR '
    'globe OR smart OR converge OR dito '
    '-golden -pvl -pba -basketball -volleyball -nba -fiba -uaap -ncaa '
    '-gilas -"converge fiberxers" -traded -debut -match -"high speed hitters"'
)
