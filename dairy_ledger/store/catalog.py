"""
Bundled reference lists used to seed a fresh installation.
"""

import re
from datetime import datetime, timezone
from typing import Dict, List


# Names whose codes don't follow the initials rule
PRODUCT_CODE_SPECIAL_CASES: Dict[str, str] = {
    "F&L": "FL",
    "A. TAAK": "AT",
    "W.TAAK": "WT",
    "W.DAHI": "WD",
    "100 W": "100W",
    "150 W": "150W",
    "80 A": "80A",
    "200 A": "200A",
}


def generate_product_code(name: str) -> str:
    """
    Derive a short product code from a product name.

    Single words use their first four letters; longer names use the
    initial of every word followed by any numbers in the name.
    """
    if name in PRODUCT_CODE_SPECIAL_CASES:
        return PRODUCT_CODE_SPECIAL_CASES[name]

    words = name.split(" ")
    if len(words) == 1:
        return words[0][:4].upper()

    code = "".join(word[:1] for word in words)
    code += "".join(re.findall(r"\d+", name))
    return code.upper()


# (name, price, category, description)
_PRODUCTS = [
    ("AMUL TAZZA", 28, "Milk", "Amul Tazza Milk"),
    ("AMUL COW", 30, "Milk", "Amul Cow Milk"),
    ("AMUL A2", 35, "Milk", "Amul A2 Milk"),
    ("MAHA", 32, "Milk", "Maha Milk"),
    ("G.COW H", 29, "Milk", "G.Cow H Milk"),
    ("G.COW F", 27, "Milk", "G.Cow F Milk"),
    ("G.SPL H", 33, "Milk", "G.Special H Milk"),
    ("G.SPL F", 31, "Milk", "G.Special F Milk"),
    ("G.SHAKTI", 34, "Milk", "G.Shakti Milk"),
    ("G.DAHI H", 25, "Curd", "G.Dahi H"),
    ("G.DAHI F", 23, "Curd", "G.Dahi F"),
    ("TONE H", 26, "Milk", "Tone H Milk"),
    ("TONE F", 24, "Milk", "Tone F Milk"),
    ("SPL H", 30, "Milk", "Special H Milk"),
    ("SPL F", 28, "Milk", "Special F Milk"),
    ("SPL J", 32, "Milk", "Special J Milk"),
    ("AKSHARA", 27, "Milk", "Akshara Milk"),
    ("SARTHI", 29, "Milk", "Sarthi Milk"),
    ("WARNA SPL", 31, "Milk", "Warna Special Milk"),
    ("WARNA COW", 30, "Milk", "Warna Cow Milk"),
    ("WARNA TAZZA", 28, "Milk", "Warna Tazza Milk"),
    ("A. TAAK", 20, "Buttermilk", "A. Taak Buttermilk"),
    ("W.TAAK", 18, "Buttermilk", "W.Taak Buttermilk"),
    ("W.DAHI", 22, "Curd", "W.Dahi Curd"),
    ("100 W", 25, "Milk", "100 W Milk"),
    ("150 W", 30, "Milk", "150 W Milk"),
    ("80 A", 20, "Milk", "80 A Milk"),
    ("200 A", 35, "Milk", "200 A Milk"),
]

# area -> (address, customer names)
_CUSTOMERS_BY_AREA = {
    "KIDWAI NAGAR": ("Kidwai Nagar", ["MUNNA"]),
    "SEWRI": ("Sewri", ["LAXMI BAKERY", "AGASTI", "AGASTI CHAI", "MALI", "TIWARI", "JAYESH"]),
    "LALBAUGH": ("Lalbaugh", ["RAMBIYA", "SHERA", "BHAIYA", "MAHAVIR", "PATIL CHAI", "GAWLI"]),
    "PAREL-BHOIWADA": ("Parel-Bhoiwada", ["DIPESH", "MAUSI", "NAGORI", "KAILAS LASSI"]),
    "NAIGAON-BHOIWADA": ("Naigaon-Bhoiwada", [
        "JANTA BK", "MAHADEV", "TAMBE", "SARFARE", "RAJU K", "SANJAY K", "KRISHNA.1", "JAGTAP",
    ]),
    "SHOP": ("Shop Area", [
        "SURESH", "GUPTA", "RANE", "RANE 2", "PUROHIT", "SAKU", "SENA", "NILESH",
        "MAHARAJ", "AHEMAD", "MAULI BAKERY", "HAFKINE CENTRE",
    ]),
}

_FIRST_PHONE = 9876543210


def products_list() -> List[dict]:
    """Fresh copies of the bundled product catalog."""
    created_at = datetime.now(timezone.utc).isoformat()
    return [
        {
            "name": name,
            "code": generate_product_code(name),
            "price": price,
            "unit": "piece",
            "category": category,
            "isActive": True,
            "hasVariants": False,
            "description": description,
            "createdAt": created_at,
        }
        for name, price, category, description in _PRODUCTS
    ]


def customers_list() -> List[dict]:
    """Fresh copies of the bundled customer list, in delivery-area order."""
    created_at = datetime.now(timezone.utc).isoformat()
    customers = []
    for area, (address, names) in _CUSTOMERS_BY_AREA.items():
        for name in names:
            customers.append({
                "name": name,
                "phone": str(_FIRST_PHONE + len(customers)),
                "address": address,
                "area": area,
                "outstandingBalance": 0,
                "totalPaid": 0,
                "balance": 0,
                "isActive": True,
                "createdAt": created_at,
            })
    return customers
