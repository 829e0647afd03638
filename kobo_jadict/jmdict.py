"""
JMdict XML reader.

Streams WordEntry records out of JMdict_e.xml. JMdict encodes part of speech
and usage notes as XML entities (&v1;, &vt;, &uk;); lxml expands those to
their descriptions, so the DTD is scanned up front to map descriptions back
to the short codes.
"""

import logging
import re
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

from lxml import etree

from kobo_jadict.constants import (
    ADJECTIVE_CLASSES,
    JMDICT_CONJUGATION,
    USUALLY_KANA_TAG,
    VERB_CLASSES,
    ConjugationClass,
    PartOfSpeech,
)
from kobo_jadict.raw_types import WordEntry

logger = logging.getLogger(__name__)

XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"
GLOSS_LANGUAGE = "eng"
GLOSS_JOIN = "; "

UNCOMMON_PRIORITY = 100


# ============================================================================
# Entity Parsing
# ============================================================================

ENTITY_PATTERN = re.compile(rb'<!ENTITY\s+([\w-]+)\s+"([^"]*)"\s*>')


def parse_entity_definitions(xml_path: Path) -> Dict[str, str]:
    """
    Parse entity definitions from the JMdict DTD.

    Returns:
        Dict mapping expanded entity text to the entity name
    """
    replacements: Dict[str, str] = {}

    with open(xml_path, 'rb') as f:
        content = b''
        for line in f:
            content += line
            if b']>' in line:
                break

    for match in ENTITY_PATTERN.finditer(content):
        name = match.group(1).decode('utf-8')
        value = match.group(2).decode('utf-8')
        if name not in ('lt', 'gt', 'amp', 'apos', 'quot'):
            replacements[value] = name

    return replacements


def node_text(elem) -> str:
    """Get all text from element."""
    return ''.join(elem.itertext())


# ============================================================================
# Priorities
# ============================================================================

def calculate_priority(pri_codes: List[str]) -> int:
    """
    Calculate the priority of one headword from its ke_pri/re_pri codes.

    Lower is more common: nfXX frequency bands scale with XX, any other
    priority marker counts as very common.
    """
    if not pri_codes:
        return UNCOMMON_PRIORITY

    common = 0
    for code in pri_codes:
        if code.startswith('nf'):
            try:
                common = int(code[2:])
            except ValueError:
                pass

    if common == 0:
        return 10
    return 20 + common * 2


# ============================================================================
# Entry Parsing
# ============================================================================

def classify(pos_codes: List[str]) -> Tuple[PartOfSpeech, ConjugationClass]:
    """
    Get the (PartOfSpeech, ConjugationClass) for a list of JMdict pos codes.

    The first code with a known conjugation decides the class.
    """
    conj = ConjugationClass.NONE
    for code in pos_codes:
        if code in JMDICT_CONJUGATION:
            conj = JMDICT_CONJUGATION[code]
            break

    if conj in VERB_CLASSES:
        pos = PartOfSpeech.VERB
    elif conj in ADJECTIVE_CLASSES or any(c.startswith('adj') for c in pos_codes):
        pos = PartOfSpeech.ADJECTIVE
    elif 'exp' in pos_codes:
        pos = PartOfSpeech.EXPRESSION
    else:
        pos = PartOfSpeech.OTHER

    return pos, conj


def parse_entry(elem, entities: Dict[str, str]) -> Optional[WordEntry]:
    """
    Parse one <entry> element.

    Returns:
        A WordEntry, or None if the entry has no usable reading
    """
    def code(e) -> str:
        text = node_text(e)
        return entities.get(text, text)

    seq_elem = elem.find('ent_seq')
    seq = int(node_text(seq_elem)) if seq_elem is not None else 0

    priorities = []

    writings = []
    for k_elem in elem.findall('k_ele'):
        keb = k_elem.find('keb')
        if keb is not None:
            writings.append(node_text(keb))
            priorities.append(calculate_priority([node_text(p) for p in k_elem.findall('ke_pri')]))

    readings = []
    for r_elem in elem.findall('r_ele'):
        reb = r_elem.find('reb')
        if reb is None:
            continue
        # Skip outdated kana
        if any(code(inf) == 'ok' for inf in r_elem.findall('re_inf')):
            continue
        readings.append(node_text(reb))
        priorities.append(calculate_priority([node_text(p) for p in r_elem.findall('re_pri')]))

    if not readings:
        return None

    pos_codes: List[str] = []
    misc_codes: List[str] = []
    glosses = []
    for sense in elem.findall('sense'):
        for pos_elem in sense.findall('pos'):
            pos_code = code(pos_elem)
            if pos_code not in pos_codes:
                pos_codes.append(pos_code)
        for misc_elem in sense.findall('misc'):
            misc_code = code(misc_elem)
            if misc_code not in misc_codes:
                misc_codes.append(misc_code)

        texts = [
            node_text(g) for g in sense.findall('gloss')
            if g.get(XML_LANG, GLOSS_LANGUAGE) == GLOSS_LANGUAGE
        ]
        if texts:
            glosses.append(GLOSS_JOIN.join(texts))

    pos, conj = classify(pos_codes)

    return WordEntry(
        writings=tuple(writings),
        readings=tuple(readings),
        glosses=tuple(glosses),
        pos=pos,
        conj=conj,
        usually_kana=USUALLY_KANA_TAG in misc_codes,
        tags=frozenset(pos_codes + misc_codes),
        priority=min(priorities),
        seq=seq,
    )


def iter_jmdict(xml_path: Union[str, Path]) -> Iterator[WordEntry]:
    """
    Stream every word in a JMdict XML file.

    Args:
        xml_path: Path to JMdict_e.xml (or any JMdict variant)

    Yields:
        WordEntry objects in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    xml_path = Path(xml_path)
    if not xml_path.exists():
        raise FileNotFoundError(f"JMdict file not found: {xml_path}")

    logger.info("Parsing entity definitions...")
    entities = parse_entity_definitions(xml_path)

    logger.info("Parsing JMdict entries...")
    context = etree.iterparse(
        str(xml_path),
        events=('end',),
        tag='entry',
        recover=True,
        load_dtd=True,
        no_network=True,
    )

    count = 0
    for event, elem in context:
        entry = parse_entry(elem, entities)

        elem.clear()
        while elem.getprevious() is not None:
            del elem.getparent()[0]

        if entry is None:
            continue

        count += 1
        if count % 10000 == 0:
            logger.info(f"  Parsed {count} entries...")

        yield entry

    logger.info(f"JMdict entries: {count}")
