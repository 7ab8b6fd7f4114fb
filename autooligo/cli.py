"""
AutoOligo CLI - Scriptable point-mutation design.

Usage:
    autooligo design --gene PHO13 --residue 10 --aa P
    autooligo design --sequence ATGTCT... --residue 10 --aa P --format table
    autooligo score GTCAGTCAGTCAGTCAGTCAGGG

Pipe-friendly:
    autooligo design --gene PHO13 --residue 10 --aa P | jq '.results[0]'
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from autooligo import __version__
from autooligo.config import get_config

# Initialize Typer app and Rich console
app = typer.Typer(
    name="autooligo",
    help="CRISPR point mutation designer for yeast",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()


# =============================================================================
# Version callback
# =============================================================================

def version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold blue]AutoOligo[/bold blue] version {__version__}")
        raise typer.Exit()


# =============================================================================
# Main app options
# =============================================================================

@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log per-site decisions to stderr",
    ),
) -> None:
    """
    AutoOligo - CRISPR Point Mutation Designer

    Find Cas9 sites, design repair templates and cloning oligos.
    """
    config = get_config()
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        filename=str(config.log_file) if config.log_file else None,
    )


# =============================================================================
# Design command
# =============================================================================

@app.command()
def design(
    residue: int = typer.Option(
        ...,
        "--residue", "-r",
        min=1,
        help="1-based residue number to mutate",
    ),
    amino_acid: str = typer.Option(
        ...,
        "--aa", "-a",
        help="New amino acid (single-letter code)",
    ),
    gene: Optional[str] = typer.Option(
        None,
        "--gene", "-g",
        help="Gene name to look up in the coding-sequence FASTA (e.g., PHO13)",
    ),
    sequence: Optional[str] = typer.Option(
        None,
        "--sequence", "-s",
        help="Coding sequence directly (starts at ATG)",
    ),
    fasta: Optional[Path] = typer.Option(
        None,
        "--fasta",
        help="Coding-sequence FASTA (default: AUTOOLIGO_GENES_FASTA)",
    ),
    oligo_length: Optional[int] = typer.Option(
        None,
        "--oligo-length", "-l",
        help="Repair oligo length (60-100 nt); resizes the homology arms",
    ),
    rank: bool = typer.Option(
        False,
        "--rank",
        help="Order results by score category and strategy instead of proximity",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Output file. If not specified, prints to stdout.",
    ),
    format: str = typer.Option(
        "json",
        "--format", "-f",
        help="Output format: json, tsv, table, idt, fasta",
    ),
) -> None:
    """
    Design repair templates and guide oligos for a point mutation.

    Examples:
        autooligo design --gene PHO13 --residue 10 --aa P
        autooligo design --sequence ATG... --residue 10 --aa P --oligo-length 80
    """
    if not gene and not sequence:
        console.print("[red]Error:[/red] Must specify --gene or --sequence")
        raise typer.Exit(1)

    from autooligo.models.data_classes import GeneInfo
    from autooligo.design import (
        InvalidAminoAcidError,
        NoSiteFoundError,
        NoViableTemplateError,
        design_point_mutation,
        rank_results,
    )
    from autooligo.genome.reference import GeneNotFoundError, GeneSequenceSource

    try:
        if gene:
            gene_info = GeneSequenceSource(fasta).resolve(gene)
        else:
            gene_info = GeneInfo(id="input", symbol="input", sequence=sequence.strip().upper())

        design_results = design_point_mutation(
            gene_info, residue, amino_acid, oligo_length=oligo_length
        )
    except (GeneNotFoundError, FileNotFoundError) as e:
        _fail("gene_not_found", str(e))
    except NoSiteFoundError as e:
        _fail("no_site_found", str(e))
    except NoViableTemplateError as e:
        _fail("no_viable_template", str(e))
    except (InvalidAminoAcidError, ValueError) as e:
        _fail("invalid_input", str(e))

    results = design_results.results
    if rank:
        results = rank_results(results)

    payload = {
        "status": "success",
        "gene": {
            "id": design_results.gene.id,
            "symbol": design_results.gene.symbol,
            "description": design_results.gene.description,
        },
        "mutation": design_results.mutation_label,
        "n_sites_found": design_results.n_sites_found,
        "results": [_result_to_dict(i, r) for i, r in enumerate(results, 1)],
    }
    _output_results(payload, results, design_results.gene.symbol, output, format)


# =============================================================================
# Score command
# =============================================================================

@app.command()
def score(
    guide_with_pam: str = typer.Argument(..., help="23-nt spacer + PAM"),
) -> None:
    """Show the heuristic efficiency score and its per-rule breakdown."""
    from autooligo.design.efficiency import RuleBasedScorer

    if len(guide_with_pam) != 23:
        console.print(f"[red]Error:[/red] Expected 23 nt, got {len(guide_with_pam)}")
        raise typer.Exit(1)

    total, rules = RuleBasedScorer().score(guide_with_pam)
    table = Table(title=f"{guide_with_pam.upper()}  score {total}")
    table.add_column("Rule", style="cyan")
    table.add_column("Delta", style="yellow", justify="right")
    table.add_column("Reason")
    for rule in rules.values():
        table.add_row(rule.rule_name, f"{rule.delta:+d}", rule.reason)
    console.print(table)


# =============================================================================
# Serve command
# =============================================================================

@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", help="Port"),
) -> None:
    """Run the HTTP API."""
    from autooligo.api.server import run

    run(host=host, port=port)


# =============================================================================
# Helpers
# =============================================================================

def _fail(error_type: str, message: str) -> NoReturn:
    print(json.dumps({"status": "error", "error_type": error_type, "error": message}, indent=2))
    raise typer.Exit(1)


def _result_to_dict(rank: int, result) -> Dict[str, Any]:
    return {
        "rank": rank,
        "strand": result.site.strand.value,
        "site_position": result.site.position,
        "guide_with_pam": result.site.guide_with_pam.upper(),
        "strategy": result.strategy.value,
        "silent_mutation_count": result.silent_mutation_count,
        "score": result.score,
        "score_category": result.score_category.value,
        "cloning_oligo_a": result.cloning_oligo_a,
        "cloning_oligo_b": result.cloning_oligo_b,
        "repair_template": result.repair_template,
        "repair_template_rev_comp": result.repair_template_rev_comp,
        "homology_start": result.homology_start,
        "homology_end": result.homology_end,
        "aa_changes_count": result.aa_changes_count,
    }


def _output_results(
    payload: dict,
    results: List,
    name: str,
    output: Optional[Path],
    format: str,
) -> None:
    """Output results in specified format."""
    from autooligo.cloning import OligoGenerator

    if format == "json":
        content = json.dumps(payload, indent=2, default=str)
    elif format == "tsv":
        lines = ["rank\tstrand\tguide\tstrategy\tsilent\tscore"]
        for row in payload["results"]:
            lines.append("\t".join(str(row[k]) for k in (
                "rank", "strand", "guide_with_pam", "strategy",
                "silent_mutation_count", "score",
            )))
        content = "\n".join(lines)
    elif format == "idt":
        content = OligoGenerator().export_idt_format(results, name=name)
    elif format == "fasta":
        content = OligoGenerator().export_fasta(results, name=name)
    elif format == "table":
        table = Table(title=f"{name} {payload['mutation']}")
        table.add_column("Rank", style="dim")
        table.add_column("Guide + PAM", style="cyan")
        table.add_column("Strand")
        table.add_column("Strategy", style="green")
        table.add_column("Silent", justify="right")
        table.add_column("Score", style="yellow", justify="right")
        for row in payload["results"]:
            table.add_row(
                str(row["rank"]),
                row["guide_with_pam"],
                row["strand"],
                row["strategy"],
                str(row["silent_mutation_count"]),
                str(row["score"]),
            )
        console.print(table)
        return
    else:
        console.print(f"[red]Error:[/red] Unknown format {format!r}")
        raise typer.Exit(1)

    if output:
        output.write_text(content)
        console.print(f"[green]Results written to {output}[/green]")
    else:
        # Print to stdout for piping
        print(content)


# =============================================================================
# Entry point
# =============================================================================

if __name__ == "__main__":
    app()
