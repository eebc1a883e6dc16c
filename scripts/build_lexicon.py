#!/usr/bin/env python3
"""
Lexicon Builder for kotoba-core.

This script builds the packaged lexicon from JMdict XML. It streams the
XML, keeps entries that have a kanji writing (common ones only, unless
--all is given), and writes them to lexicon.json keyed by hiragana
reading.

Usage:
    python scripts/build_lexicon.py [--jmdict PATH] [--output PATH] [--limit N]

Requirements:
    pip install kotoba-core[build]  # Installs lxml for parsing
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import Dict, List, Optional

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from lxml import etree

from kotoba_core.characters import as_hiragana, is_kana
from kotoba_core.lexicon import get_lexicon_path

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


# ============================================================================
# Paths
# ============================================================================

DEFAULT_JMDICT = Path(__file__).parent.parent / "data" / "JMdict_e.xml"
DEFAULT_OUTPUT = get_lexicon_path()


# ============================================================================
# JMDict Parsing
# ============================================================================

def node_text(elem) -> str:
    """Get all text from element."""
    return ''.join(elem.itertext())


def is_common(elem) -> bool:
    """Check if any kanji or kana writing of an entry carries a priority tag."""
    return elem.find('k_ele/ke_pri') is not None or elem.find('r_ele/re_pri') is not None


def first_gloss(elem) -> Optional[str]:
    """Get the first English gloss of the first sense."""
    sense = elem.find('sense')
    if sense is None:
        return None
    glosses = [node_text(g) for g in sense.findall('gloss')]
    if not glosses:
        return None
    return '; '.join(glosses[:2])


def parse_entries(xml_path: Path, common_only: bool = True, limit: Optional[int] = None) -> Dict[str, List[dict]]:
    """
    Parse JMdict XML into lexicon data.

    Returns:
        Mapping of hiragana reading -> list of {"surface", "gloss"}, in
        JMdict order
    """
    lexicon: Dict[str, List[dict]] = {}

    logger.info("Parsing JMdict entries...")

    context = etree.iterparse(
        str(xml_path),
        events=('end',),
        tag='entry',
        recover=True,
        load_dtd=True,
        no_network=True
    )

    count = 0
    added = 0
    for event, elem in context:
        count += 1
        if count % 10000 == 0:
            logger.info(f"  Parsed {count} entries...")

        kanji = [node_text(keb) for keb in elem.findall('k_ele/keb')]
        gloss = first_gloss(elem)

        if kanji and gloss and (is_common(elem) or not common_only):
            surface = kanji[0]
            for reb in elem.findall('r_ele/reb'):
                reading = as_hiragana(node_text(reb))
                if not is_kana(reading):
                    continue
                items = lexicon.setdefault(reading, [])
                if all(item['surface'] != surface for item in items):
                    items.append({'surface': surface, 'gloss': gloss})
            added += 1

        elem.clear()
        while elem.getprevious() is not None:
            del elem.getparent()[0]

        if limit is not None and added >= limit:
            break

    logger.info(f"Parsed {count} entries, kept {added} under {len(lexicon)} readings")
    return lexicon


# ============================================================================
# Lexicon Writing
# ============================================================================

def save_lexicon(lexicon: Dict[str, List[dict]], output_path: Path):
    """Save lexicon data as JSON."""
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(lexicon, f, ensure_ascii=False, indent=2)
        f.write('\n')

    file_size = output_path.stat().st_size / 1024
    logger.info(f"Saved lexicon to {output_path} ({file_size:.1f} KB)")


# ============================================================================
# Main
# ============================================================================

def main():
    parser = argparse.ArgumentParser(
        description="Build the kotoba-core lexicon from JMdict XML"
    )
    parser.add_argument(
        '--jmdict', '-j',
        type=Path,
        default=DEFAULT_JMDICT,
        help=f"Path to JMdict XML file (default: {DEFAULT_JMDICT})"
    )
    parser.add_argument(
        '--output', '-o',
        type=Path,
        default=DEFAULT_OUTPUT,
        help=f"Output lexicon path (default: {DEFAULT_OUTPUT})"
    )
    parser.add_argument(
        '--limit', '-l',
        type=int,
        default=None,
        help="Stop after this many kept entries"
    )
    parser.add_argument(
        '--all', '-a',
        action='store_true',
        help="Keep uncommon entries too"
    )

    args = parser.parse_args()

    if not args.jmdict.exists():
        logger.error(f"JMdict file not found: {args.jmdict}")
        sys.exit(1)

    start_time = time.time()

    lexicon = parse_entries(args.jmdict, common_only=not args.all, limit=args.limit)
    save_lexicon(lexicon, args.output)

    elapsed = time.time() - start_time
    logger.info(f"Build completed in {elapsed:.1f} seconds")


if __name__ == '__main__':
    main()
