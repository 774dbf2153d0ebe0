from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, List, Optional

from .aggregate import SourceFn, collect_inventory, default_sources
from .config import GRID_SOURCE_NAME, TABLE_SOURCE_NAME, ScrollSettings
from .excel_writer import write_records_to_excel
from .types import StructuredRecord, dump_records


MESSAGES = {
    "en": {
        "stage_collect": "[1/2] Collecting listings from: {sources}",
        "stage_save": "[2/2] Saving {count} records to {path}",
        "success": "Done. Mezcal records: {count}",
        "file": "File: {path}",
        "error": "Inventory error: {error}",
        "interrupted": "Interrupted by user",
        "help_desc": (
            "Collect mezcal listings from the table and grid retailers into one inventory.\n"
            "Writes JSON, or an Excel workbook when the output ends in .xlsx."
        ),
        "help_out": "Output path, .json or .xlsx (default inventory.json)",
        "help_template": "Excel template to start from (optional)",
        "help_source": "Which retailers to scrape (default all)",
        "help_partial": "Keep results from working retailers when one fails",
        "help_max_scrolls": "Maximum scroll iterations on the grid page",
        "help_no_growth": "Stop scrolling after this many polls without new content",
        "help_scroll_wait": "Wait after each scroll (ms)",
        "help_initial_wait": "Wait after opening the category, before scrolling (ms)",
        "help_nav_timeout": "Page navigation timeout (ms)",
        "help_headful": "Show the browser window",
        "help_ua": "Override User-Agent",
        "help_retries": "Retry count for HTTP errors",
        "help_dump": "Directory for a screenshot and HTML dump when the grid fails",
        "help_lang": "Messages language: en or es (default en)",
        "help_verbose": "Verbose logging",
    },
    "es": {
        "stage_collect": "[1/2] Recopilando productos de: {sources}",
        "stage_save": "[2/2] Guardando {count} registros en {path}",
        "success": "Listo. Registros de mezcal: {count}",
        "file": "Archivo: {path}",
        "error": "Error de inventario: {error}",
        "interrupted": "Interrumpido por el usuario",
        "help_desc": (
            "Reúne los mezcales de las tiendas (tabla y cuadrícula) en un solo inventario.\n"
            "Escribe JSON, o un libro de Excel si la salida termina en .xlsx."
        ),
        "help_out": "Ruta de salida, .json o .xlsx (por defecto inventory.json)",
        "help_template": "Plantilla de Excel (opcional)",
        "help_source": "Tiendas a consultar (por defecto todas)",
        "help_partial": "Conservar resultados parciales si una tienda falla",
        "help_max_scrolls": "Máximo de desplazamientos en la cuadrícula",
        "help_no_growth": "Detenerse tras tantas lecturas sin contenido nuevo",
        "help_scroll_wait": "Espera tras cada desplazamiento (ms)",
        "help_initial_wait": "Espera tras abrir la categoría, antes de desplazarse (ms)",
        "help_nav_timeout": "Tiempo máximo de navegación (ms)",
        "help_headful": "Mostrar la ventana del navegador",
        "help_ua": "Reemplazar el User-Agent",
        "help_retries": "Número de reintentos HTTP",
        "help_dump": "Carpeta para captura y HTML cuando falla la cuadrícula",
        "help_lang": "Idioma de los mensajes: en o es (por defecto en)",
        "help_verbose": "Registro detallado",
    },
}

SOURCE_CHOICES = {
    "table": [TABLE_SOURCE_NAME],
    "grid": [GRID_SOURCE_NAME],
    "all": [TABLE_SOURCE_NAME, GRID_SOURCE_NAME],
}


def _msg(lang: str, key: str, **kwargs) -> str:
    lang_key = lang if lang in MESSAGES else "en"
    template = MESSAGES[lang_key].get(key, "")
    return template.format(**kwargs)


def write_inventory(
    records: List[StructuredRecord],
    out_path: str,
    template_path: Optional[str] = None,
) -> None:
    if out_path.lower().endswith(".xlsx"):
        write_records_to_excel(records, out_path=out_path, template_path=template_path)
        return
    with open(out_path, "w", encoding="utf-8") as fh:
        fh.write(dump_records(records))


def collect_to_file(
    out_path: str,
    sources: Dict[str, SourceFn],
    template_path: Optional[str] = None,
    partial: bool = False,
    lang: str = "en",
) -> List[StructuredRecord]:
    """High-level convenience function: collect the inventory and save it.

    Returns the merged, price-sorted records.
    """
    print(_msg(lang, "stage_collect", sources=", ".join(sources)), flush=True)
    records = collect_inventory(sources, partial=partial)

    print(_msg(lang, "stage_save", count=len(records), path=out_path), flush=True)
    write_inventory(records, out_path, template_path=template_path)
    return records


def _build_arg_parser(lang: str = "en") -> argparse.ArgumentParser:
    loc = MESSAGES.get(lang, MESSAGES["en"])
    defaults = ScrollSettings()
    p = argparse.ArgumentParser(
        prog="mezcal-inventory",
        description=loc["help_desc"],
    )
    p.add_argument(
        "-o",
        "--out",
        dest="out_path",
        default="inventory.json",
        help=loc["help_out"],
    )
    p.add_argument(
        "-t",
        "--template",
        dest="template_path",
        default=None,
        help=loc["help_template"],
    )
    p.add_argument(
        "-s",
        "--source",
        dest="source",
        choices=sorted(SOURCE_CHOICES),
        default="all",
        help=loc["help_source"],
    )
    p.add_argument(
        "--partial",
        dest="partial",
        action="store_true",
        help=loc["help_partial"],
    )
    p.add_argument(
        "--max-scrolls",
        dest="max_scrolls",
        type=int,
        default=defaults.max_iterations,
        help=loc["help_max_scrolls"],
    )
    p.add_argument(
        "--no-growth",
        dest="no_growth",
        type=int,
        default=defaults.no_growth_limit,
        help=loc["help_no_growth"],
    )
    p.add_argument(
        "--scroll-wait",
        dest="scroll_wait",
        type=int,
        default=defaults.wait_ms,
        help=loc["help_scroll_wait"],
    )
    p.add_argument(
        "--initial-wait",
        dest="initial_wait",
        type=int,
        default=defaults.initial_wait_ms,
        help=loc["help_initial_wait"],
    )
    p.add_argument(
        "--nav-timeout",
        dest="nav_timeout",
        type=int,
        default=defaults.navigation_timeout_ms,
        help=loc["help_nav_timeout"],
    )
    p.add_argument(
        "--headful",
        dest="headful",
        action="store_true",
        help=loc["help_headful"],
    )
    p.add_argument(
        "-H",
        "--user-agent",
        dest="user_agent",
        default=None,
        help=loc["help_ua"],
    )
    p.add_argument(
        "-r",
        "--retries",
        dest="retries",
        type=int,
        default=3,
        help=loc["help_retries"],
    )
    p.add_argument(
        "--dump-dir",
        dest="dump_dir",
        default=None,
        help=loc["help_dump"],
    )
    p.add_argument(
        "--lang",
        dest="lang",
        choices=["en", "es"],
        default=lang,
        help=loc["help_lang"],
    )
    p.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        action="store_true",
        help=loc["help_verbose"],
    )
    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_arg_parser("en")
    args = parser.parse_args(argv)
    lang = args.lang

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = ScrollSettings(
        max_iterations=args.max_scrolls,
        no_growth_limit=args.no_growth,
        wait_ms=args.scroll_wait,
        initial_wait_ms=args.initial_wait,
        navigation_timeout_ms=args.nav_timeout,
    )
    available = default_sources(
        settings=settings,
        headless=not args.headful,
        user_agent=args.user_agent,
        retries=args.retries,
        dump_dir=args.dump_dir,
    )
    sources = {name: available[name] for name in SOURCE_CHOICES[args.source]}

    try:
        records = collect_to_file(
            out_path=args.out_path,
            sources=sources,
            template_path=args.template_path,
            partial=args.partial,
            lang=lang,
        )
        print(_msg(lang, "success", count=len(records)))
        print(_msg(lang, "file", path=args.out_path))
        return 0
    except KeyboardInterrupt:
        print(_msg(lang, "interrupted"), file=sys.stderr)
        return 130
    except Exception as exc:
        print(_msg(lang, "error", error=exc), file=sys.stderr)
        return 1
