"""
Issuer template patterns for known Italian utilities and municipal tax offices.

Indicators and required fields are plain lowercase phrases matched as substrings.
Patterns are regex strings compiled once when the template registry is built;
group 1 (or the whole match) becomes the extracted value.
"""

# Order matters: on equal scores the first template listed wins
ISSUER_TEMPLATE_PATTERNS = {
    "enel": {
        "company": "ENEL",
        "category": "Bollette_Energia",
        "indicators": ["enel", "energia elettrica", "e-distribuzione"],
        "required_fields": ["codice cliente", "kwh", "periodo"],
        "confidence_boost": 20,
        "patterns": {
            "amount": r"(?i)totale da pagare[:\s]*€?\s*([\d.,]+)",
            "code": r"(?i)codice cliente[:\s]*(\w+)",
            "period": r"(?i)periodo[:\s]*dal[:\s]*([\d/]+)[:\s]*al[:\s]*([\d/]+)",
        },
    },

    "eni": {
        "company": "ENI",
        "category": "Bollette_Gas",
        "indicators": ["eni gas", "gas e luce", "eni plenitude"],
        "required_fields": ["cliente", "smc", "gas"],
        "confidence_boost": 20,
        "patterns": {
            "amount": r"(?i)importo totale[:\s]*€?\s*([\d.,]+)",
            "consumption": r"(?i)consumo[:\s]*([\d.,]+)\s*smc",
        },
    },

    "acea": {
        "company": "ACEA",
        "category": "Bollette_Acqua",
        "indicators": ["acea", "acqua", "servizio idrico"],
        "required_fields": ["utenza", "mc", "acqua"],
        "confidence_boost": 20,
        "patterns": {
            "amount": r"(?i)totale[:\s]*€?\s*([\d.,]+)",
            "consumption": r"(?i)([\d.,]+)\s*mc\b",
        },
    },

    "tim": {
        "company": "TIM",
        "category": "Bollette_Telefono",
        "indicators": ["telecom italia", "tim s.p.a", "tim spa", "telefono"],
        "required_fields": ["linea", "traffico"],
        "confidence_boost": 20,
        "patterns": {
            "amount": r"(?i)totale fattura[:\s]*€?\s*([\d.,]+)",
            "phone": r"(\d{3}[\s\-]?\d{3}[\s\-]?\d{4})",
        },
    },

    "imu": {
        "company": "Comune",
        "category": "IMU",
        "indicators": ["imu", "imposta municipale", "tributi", "f24"],
        "required_fields": ["codice tributo", "immobile"],
        "confidence_boost": 25,
        "patterns": {
            "amount": r"(?i)(?:importo|totale|saldo|acconto)[:\s]*€?\s*([\d.,]*\d)",
            "year": r"(?i)anno(?: d'imposta| di riferimento)?[:\s]*(20\d{2})",
            "code": r"(?i)codice tributo[:\s]*(\d+)",
        },
    },

    "tari": {
        "company": "Comune",
        "category": "TARI",
        "indicators": ["tari", "rifiuti", "tarsu", "tassa rifiuti"],
        "required_fields": ["superficie", "rifiuti"],
        "confidence_boost": 25,
        "patterns": {
            "amount": r"(?i)(?:importo|totale|rata)[:\s]*€?\s*([\d.,]*\d)",
            "surface": r"(?i)superficie[:\s]*([\d.,]+)\s*mq",
        },
    },

    "vodafone": {
        "company": "VODAFONE",
        "category": "Bollette_Telefono",
        "indicators": ["vodafone", "telefonia mobile", "telefonia"],
        "required_fields": ["numero", "piano"],
        "confidence_boost": 20,
        "patterns": {
            "amount": r"(?i)totale[:\s]*€?\s*([\d.,]+)",
            "phone": r"(\d{3}[\s\-]?\d{3}[\s\-]?\d{4})",
        },
    },

    "wind": {
        "company": "WIND TRE",
        "category": "Bollette_Telefono",
        "indicators": ["wind tre", "windtre", "wind"],
        "required_fields": ["utenza", "traffico"],
        "confidence_boost": 20,
        "patterns": {
            "amount": r"(?i)importo[:\s]*€?\s*([\d.,]+)",
            "phone": r"(\d{3}[\s\-]?\d{3}[\s\-]?\d{4})",
        },
    },
}

# Company names the acquisition stage reports as structured hints
KNOWN_COMPANIES = [
    "enel", "eni", "acea", "tim", "vodafone", "wind tre",
    "edison", "unicredit", "intesa",
]
