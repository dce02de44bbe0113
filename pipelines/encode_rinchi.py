"""Batch RInChI encoding of a reaction table."""
from __future__ import annotations

import logging
import statistics
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click
import pandas as pd
from rdkit import RDLogger

from adapters.rdkit_inchi import RDKitInChIAdapter
from rinchi.encoder import IdentifierAdapter, identify_groups, resolve_direction, write_groups
from rinchi.errors import RInChIError
from rinchi.reaction import Reaction, split_entities
from utils.hashing import rinchi_digest

LOGGER = logging.getLogger(__name__)

SAMPLE_ROW_LIMIT = 1000
_REACTION_SMILES_COLUMNS = ("rxn_smiles", "reaction_smiles", "rxn")


@dataclass
class EncodingResult:
    payload: dict[str, Any]
    failures: list[str]


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    if not verbose:
        # InChI warnings go straight to stderr
        RDLogger.DisableLog("rdApp.*")


def _load_frame(path: str) -> pd.DataFrame:
    suffix = Path(path).suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path)
    if suffix in {".json", ".jsonl"}:
        return pd.read_json(path, lines=suffix == ".jsonl")
    if suffix in {".parquet", ".pq"}:
        return pd.read_parquet(path)
    raise click.ClickException(f"Unsupported input format: {suffix}")


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return bool(pd.isna(value)) if pd.api.types.is_scalar(value) else False


def _row_id(value: Any, position: int) -> str:
    """Row identifier as text; blank cells fall back to the row position."""

    if _is_missing(value):
        return str(position)
    if isinstance(value, float) and value.is_integer():
        # numeric id columns with blanks are read as floats
        return str(int(value))
    return str(value).strip()


def _reaction_from_row(row: dict[str, Any]) -> Reaction:
    reactants = split_entities(row.get("reactants"))
    products = split_entities(row.get("products"))
    agents = split_entities(row.get("agents"))
    if reactants or products:
        return Reaction(tuple(reactants), tuple(products), tuple(agents))
    for key in _REACTION_SMILES_COLUMNS:
        value = row.get(key)
        if not isinstance(value, str) or not value.strip():
            continue
        parsed = Reaction.from_smiles(value)
        return Reaction(parsed.reactants, parsed.products, parsed.agents + tuple(agents))
    return Reaction(agents=tuple(agents))


def _encode_row(row: dict[str, Any], adapter: IdentifierAdapter) -> EncodingResult:
    try:
        reaction = _reaction_from_row(row)
    except ValueError as exc:
        LOGGER.debug("Row %s: %s", row.get("rxn_id"), exc)
        return EncodingResult(payload={"error": str(exc)}, failures=["invalid_reaction_smiles"])

    try:
        groups = identify_groups(reaction, adapter)
    except RInChIError as exc:
        LOGGER.debug("Row %s: %s", row.get("rxn_id"), exc)
        kind = type(exc).__name__
        return EncodingResult(
            payload={
                "error": str(exc),
                "role": getattr(exc, "role", None),
                "index": getattr(exc, "index", None),
            },
            failures=[kind],
        )

    rinchi = write_groups(groups).rstrip("\n")
    payload = {
        "rxn_id": row.get("rxn_id"),
        "rinchi": rinchi,
        "rinchi_hash": rinchi_digest(rinchi),
        "reactants_first": resolve_direction(groups["reactants"], groups["products"]),
        "n_reactants": len(groups["reactants"]),
        "n_products": len(groups["products"]),
        "n_agents": len(groups["agents"]),
        "provenance": [row.get("rxn_id")],
    }
    return EncodingResult(payload=payload, failures=[])


def _deduplicate(records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    deduped: dict[str, dict[str, Any]] = {}
    for record in records:
        key = record["rinchi_hash"]
        existing = deduped.get(key)
        if existing is None:
            deduped[key] = record
        else:
            existing.setdefault("provenance", []).extend(record.get("provenance", []))
    return sorted(deduped.values(), key=lambda item: item["rinchi"])


def _summarize(records: list[dict[str, Any]]) -> None:
    if not records:
        LOGGER.warning("No reactions encoded; skipping statistics")
        return
    for column in ("n_reactants", "n_products", "n_agents"):
        counts = [record[column] for record in records]
        LOGGER.info(
            "%s: mean=%.2f median=%.2f min=%d max=%d",
            column,
            statistics.fmean(counts),
            statistics.median(counts),
            min(counts),
            max(counts),
        )
    flipped = sum(1 for record in records if not record["reactants_first"])
    LOGGER.info("Products written first for %d of %d reactions", flipped, len(records))


def _write_output(records: list[dict[str, Any]], output: Path) -> None:
    frame = pd.DataFrame(records)
    output.parent.mkdir(parents=True, exist_ok=True)
    frame.to_parquet(output, index=False)


@click.command()
@click.option("--input", "input_path", required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "output_path", required=True, type=click.Path(dir_okay=False))
@click.option(
    "--failed-output",
    "failed_output_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="Optional path for rows that could not be encoded.",
)
@click.option(
    "--inchi-options",
    default="",
    show_default=True,
    help="Extra options forwarded to the InChI generator.",
)
@click.option("--sample", is_flag=True, help="Process only the first 1,000 rows for smoke tests.")
@click.option("--verbose", is_flag=True, help="Enable debug logging.")
def main(
    input_path: str,
    output_path: str,
    failed_output_path: str | None,
    inchi_options: str,
    sample: bool,
    verbose: bool,
) -> None:
    """Encode every reaction of a table as a RInChI string."""

    _configure_logging(verbose)
    LOGGER.info("Loading reactions from %s", input_path)
    frame = _load_frame(input_path)
    if sample:
        frame = frame.head(SAMPLE_ROW_LIMIT)
    total_rows = len(frame)
    LOGGER.info("Processing %s rows", total_rows)

    adapter = RDKitInChIAdapter(options=inchi_options)
    encoded: list[dict[str, Any]] = []
    failed: list[dict[str, Any]] = []
    failure_counts: Counter[str] = Counter()

    for position, row in enumerate(frame.to_dict(orient="records")):
        row["rxn_id"] = _row_id(row.get("rxn_id"), position)
        result = _encode_row(row, adapter)
        if result.failures:
            failed.append({"rxn_id": row["rxn_id"], "failures": ",".join(result.failures), **result.payload})
            failure_counts.update(result.failures)
            continue
        encoded.append(result.payload)

    success_ratio = len(encoded) / total_rows if total_rows else 1.0
    if success_ratio < 0.99:
        LOGGER.warning("Encoding success ratio %.2f < 0.99", success_ratio)
    else:
        LOGGER.info("Encoding success ratio: %.2f", success_ratio)
    if failure_counts:
        LOGGER.info("Encoding failures: %s", dict(failure_counts))

    deduped = _deduplicate(encoded)
    LOGGER.info("Deduped %s reactions into %s unique RInChIs", len(encoded), len(deduped))
    _summarize(deduped)

    output = Path(output_path)
    _write_output(deduped, output)
    if failed_output_path and failed:
        _write_output(failed, Path(failed_output_path))

    success_flag = output.parent / "_SUCCESS"
    success_flag.write_text("encode_rinchi completed\n")
    LOGGER.info("Wrote %s and success sentinel %s", output, success_flag)


if __name__ == "__main__":  # pragma: no cover
    main()
