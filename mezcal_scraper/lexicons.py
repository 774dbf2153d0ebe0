"""
Curated name lists used by the extraction rules.

All lists are tuples built once at import time and are never mutated.
"""

from __future__ import annotations

from typing import Tuple


# Any of these in a title marks it as mezcal, unless a non-mezcal marker is present too.
MEZCAL_INDICATORS: Tuple[str, ...] = (
    "Mezcal", "Espadin", "Tobala", "Cupreata", "Jabali", "Jabalí", "Tepeztate", "Tepextate",
    "Arroqueño", "Arroqueno", "Madrecuixe", "Madrecuishe", "Barril", "Mexicano",
    "Karwinskii", "Marmorata", "Cuishe", "Sierra Negra", "Coyote", "Ensamble",
    "5 Sentidos", "Aguerrido", "Chacolo", "Creador", "Derrumbes", "El Jolgorio",
    "Lalocura", "Mal Bien", "Mezcalosfera", "Neta", "Real Minero", "Rey Campero", "Vago",
    "Bozal", "Del Maguey", "Alipus", "Banhez", "Yola", "Siete Misterios", "Leyenda",
)

# Spanish "ron " keeps its trailing space; bare "ron" would hit words like "bronze"
NON_MEZCAL_MARKERS: Tuple[str, ...] = ("tequila", "rum", "ron ")

KNOWN_BRANDS: Tuple[str, ...] = (
    "5 Sentidos", "El Jolgorio", "Real Minero", "Rey Campero", "Del Maguey",
    "Alipus", "Bozal", "Lalocura", "Mal Bien", "Siete Misterios",
    "Mezcal Vago", "Mezcalosfera", "Agave de Cortes", "La Venenosa", "Derrumbes",
    "Leyenda", "La Medida", "Madre", "Banhez", "Yola", "Wahaka", "Vago", "Origen Raiz",
)

# Longest first, so "Mezcal Vago" is tried before "Vago". sorted() is stable for equal lengths.
BRANDS_BY_LENGTH: Tuple[str, ...] = tuple(sorted(KNOWN_BRANDS, key=len, reverse=True))

KNOWN_MAGUEYS: Tuple[str, ...] = (
    "Alto", "Amarillo", "Amole", "Ancho", "Arroqueño", "Azul", "Azul Telcruz",
    "Barril", "Barril Chino", "Becuela", "Bicuishe", "Blanco", "Brocha", "Bruto",
    "Candelillo", "Castilla", "Cenizo", "Chacaleño", "Chancuellar", "Chato",
    "Chico Aguillar", "Chino", "Chuparrosa", "Cimarrón", "Ciriaco", "Cirial",
    "Coyota", "Coyote", "Criollo", "Cuerno", "Cuishe", "Cuishito", "De Horno",
    "Espadilla", "Espadillon", "Espadin", "Espadín", "Espadincillo", "Funkiana",
    "Henequén", "I'gok", "Ixtero Amarillo", "Ixtero Verde", "Jabali", "Jabalí",
    "Lamparillo", "Largo", "Lineño", "Lumbre", "Macho", "Madrecuishe", "Mai",
    "Marteño", "Masparillo", "Mexicanito", "Mexicano", "Mexicano Verde",
    "Pacifica", "Papalome", "Papalometl", "Papalote", "Pelón Verde",
    "Penca Ancha", "Pichomel", "Pizorra", "Presa Grande", "Pulquero", "Rayo",
    "Sacatoro", "Sahuayensis", "Sanmartin", "Sierra Negra", "Sierrudo",
    "Tepemete", "Tepeztate", "Tepextate", "Tobala", "Tobalá",
    "Tobaxiche", "Tobaxiche Amarillo", "Tobaziche", "Tripon", "Verde", "Warash",
)

# Table rows that begin with a bare "Mezcal ..." belong to this house brand.
DEFAULT_TABLE_BRAND = "Mezcal Vago"
