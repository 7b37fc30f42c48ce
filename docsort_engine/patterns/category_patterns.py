"""
Category keyword patterns for Italian household and administrative documents.
Each category is scored on whole-word keyword and alias hits in text and filename.
"""

# Fallback bucket for documents no category scores on
FALLBACK_CATEGORY = "Altri_Documenti"

# Order matters: on equal scores the first category listed wins
CATEGORY_PATTERNS = {
    "IMU": {
        "keywords": [
            "imu", "imposta municipale", "comune", "ravvedimento",
            "f24", "tributi", "ici",
        ],
        "aliases": ["ici", "imposta comunale"],
        "weight": 1.0,
        "description": "Imposta Municipale Unica",
        "folder": "IMU",
    },

    "TARI": {
        "keywords": [
            "tari", "rifiuti", "tarsu", "tariffa rifiuti",
            "tassa rifiuti", "igiene urbana",
        ],
        "aliases": ["tarsu", "tia"],
        "weight": 1.0,
        "description": "Tassa sui rifiuti",
        "folder": "TARI",
    },

    "Bollette_Energia": {
        "keywords": [
            "energia elettrica", "enel", "eni", "edison", "acea energia",
            "kw", "kwh", "bolletta luce", "elettrica",
        ],
        "aliases": ["luce", "corrente elettrica"],
        "weight": 1.0,
        "description": "Bollette luce",
        "folder": "Bollette/Energia",
    },

    "Bollette_Gas": {
        "keywords": [
            "gas", "metano", "smc", "metro cubo", "bolletta gas", "eni gas",
        ],
        "aliases": ["gas naturale", "metano"],
        "weight": 1.0,
        "description": "Bollette gas",
        "folder": "Bollette/Gas",
    },

    "Bollette_Acqua": {
        "keywords": [
            "acqua", "acea", "acquedotto", "bolletta acqua",
            "idrico", "servizio idrico",
        ],
        "aliases": ["idrica", "acquedotto"],
        "weight": 1.0,
        "description": "Bollette acqua",
        "folder": "Bollette/Acqua",
    },

    # Issuer templates for TIM, Vodafone and Wind Tre file here
    "Bollette_Telefono": {
        "keywords": [
            "telefono", "telefonia", "traffico", "linea fissa",
            "bolletta telefonica", "fibra", "adsl",
        ],
        "aliases": ["telefonica", "cellulare"],
        "weight": 1.0,
        "description": "Bollette telefono e internet",
        "folder": "Bollette/Telefono",
    },

    "Contratti": {
        "keywords": [
            "contratto", "accordo", "clausola", "firma",
            "locazione", "affitto", "canone",
        ],
        "aliases": ["accordo", "patto"],
        "weight": 1.0,
        "description": "Contratti e accordi",
        "folder": "Contratti",
    },

    "Banca": {
        "keywords": [
            "banca", "conto corrente", "iban", "bonifico", "estratto conto",
            "movimento", "unicredit", "intesa",
        ],
        "aliases": ["bancario", "finanziario"],
        "weight": 1.0,
        "description": "Documenti bancari",
        "folder": "Banca",
    },

    "Assicurazioni": {
        "keywords": [
            "assicurazione", "polizza", "rc auto", "kasko",
            "copertura assicurativa", "premio",
        ],
        "aliases": ["polizza", "copertura"],
        "weight": 1.0,
        "description": "Polizze assicurative",
        "folder": "Assicurazioni",
    },
}

# Phrases appended to filename-derived text when the key appears in the name.
# Used only when no document text could be acquired.
FILENAME_EXPANSIONS = {
    "bolletta": "bolletta fattura documento pagamento",
    "fattura": "fattura bolletta documento commerciale",
    "enel": "enel energia elettrica bolletta luce",
    "eni": "eni gas bolletta metano",
    "acea": "acea acqua bolletta idrico",
    "telecom": "telecom tim telefono bolletta",
    "tim": "tim telecom telefono bolletta",
    "wind": "wind tre telefono bolletta",
    "vodafone": "vodafone telefono bolletta",
    "contratto": "contratto accordo documento legale",
    "affitto": "contratto locazione affitto canone",
    "locazione": "contratto locazione affitto immobile",
    "mutuo": "banca mutuo finanziamento prestito",
    "prestito": "banca prestito finanziamento credito",
    "estratto": "banca estratto conto movimento",
    "bonifico": "banca bonifico pagamento trasferimento",
    "imu": "imu imposta municipale tasse tributi",
    "tari": "tari rifiuti tasse tarsu",
    "tassa": "tassa imposta tributo pagamento",
    "f24": "f24 tasse pagamento modello",
    "ricevuta": "ricevuta pagamento quietanza",
    "polizza": "assicurazione polizza copertura",
    "assicurazione": "assicurazione polizza protezione",
    "rc": "assicurazione rc auto responsabilità civile",
    "kasko": "assicurazione kasko auto copertura",
}
