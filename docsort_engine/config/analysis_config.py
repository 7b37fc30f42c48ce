"""
Analysis configuration for the Document Classification Engine.
Contains scoring multipliers, confidence bounds and extraction limits.
"""

ANALYSIS_CONFIG = {
    # Keyword classification
    "classification": {
        "text_keyword_multiplier": 1.0,
        "filename_keyword_multiplier": 4.0,
        "text_alias_multiplier": 0.8,
        "filename_alias_multiplier": 3.0,
        "confidence_scale": 12,  # points of confidence per unit of score
        "confidence_floor": 25,
        "confidence_ceiling": 95,
        "filename_boost": 10,  # matched keyword appears in the filename
        "filename_boost_below": 85,  # boost only applies under this confidence
    },

    # Issuer template matching
    "templates": {
        "indicator_points": 10,
        "required_field_points": 5,
        "pattern_points": 8,
        "min_score": 15,  # below this no template is reported
        "confidence_ceiling": 95,
    },

    # Year resolution
    "years": {
        "min_year": 2000,
        "future_tolerance": 1,  # years after the current one still accepted
    },

    # Record excerpt
    "excerpt": {
        "max_length": 500,
        "ellipsis": "...",
    },

    # Structured hints derivation
    "hints": {
        "company_fuzzy_threshold": 85,
        "company_fuzzy_min_length": 5,  # shorter names are matched exactly only
    },
}
