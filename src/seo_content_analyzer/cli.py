"""
Command-line interface for SEO Content Analyzer.

Provides a CLI for analyzing content from URLs, Word documents or local
HTML/text files.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .content_sources import ContentExtractionError, load_content
from .corpus import CorpusLoadError, load_corpus
from .models import AnalysisOptions, ContentOptimizationResult, ContentType
from .optimizer import ContentOptimizationError, ContentOptimizer

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _score_style(score: float) -> str:
    if score >= 80:
        return "green"
    if score >= 50:
        return "yellow"
    return "red"


@click.command()
@click.argument("source", type=str)
@click.option(
    "--title",
    type=str,
    help="Document title (defaults to the title found in the source).",
)
@click.option(
    "--content-type",
    type=click.Choice([t.value for t in ContentType], case_sensitive=False),
    default=ContentType.DEFAULT.value,
    help="Content type used for word count targets (default: default).",
)
@click.option(
    "--keyword",
    "-k",
    "keywords",
    multiple=True,
    help="Target keyword to measure. Repeat for several keywords.",
)
@click.option(
    "--corpus",
    type=click.Path(exists=True, path_type=Path),
    help="CSV, Excel or JSON export of published posts for internal link suggestions.",
)
@click.option(
    "--exclude-id",
    type=str,
    help="Corpus id of the analyzed document, excluded from link suggestions.",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the full report as JSON.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Write the JSON report to this file.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output.",
)
def main(
    source: str,
    title: Optional[str],
    content_type: str,
    keywords: tuple[str, ...],
    corpus: Optional[Path],
    exclude_id: Optional[str],
    as_json: bool,
    output: Optional[Path],
    verbose: bool,
) -> None:
    """
    SEO Content Analyzer - Score content for SEO and readability.

    SOURCE is a URL, a Word document, or an HTML/text/markdown file.

    Examples:

        seo-analyze https://example.com/blog/post --content-type guide

        seo-analyze draft.docx -k "content marketing" --corpus posts.csv --json
    """
    _configure_logging(verbose)

    if not as_json:
        console.print(Panel.fit(
            "[bold blue]SEO Content Analyzer[/bold blue]\n"
            "Keyword density, structure, readability, images and internal links",
            border_style="blue",
        ))

    try:
        with console.status("[bold green]Loading content..."):
            loaded = load_content(source)

        corpus_repo = None
        if corpus:
            with console.status("[bold green]Loading corpus..."):
                corpus_repo = load_corpus(corpus)
            if verbose and not as_json:
                console.print(f"  Loaded {len(corpus_repo)} corpus documents from: {corpus}")

        options = AnalysisOptions(
            title=title or loaded.title,
            content_type=content_type,
            target_keywords=list(keywords),
            exclude_document_id=exclude_id,
        )

        with console.status("[bold green]Analyzing content..."):
            result = ContentOptimizer(corpus=corpus_repo).analyze(loaded.markup, options)

        report = result.to_dict()
        report["source"] = loaded.source

        if output:
            output.write_text(json.dumps(report, indent=2), encoding="utf-8")

        if as_json:
            click.echo(json.dumps(report, indent=2))
        else:
            _display_report(result, options.title, verbose)
            if output:
                console.print(f"\n[bold green]Report saved to:[/bold green] {output}")

    except ContentExtractionError as e:
        console.print(f"[red]Content extraction error:[/red] {e}")
        sys.exit(1)
    except CorpusLoadError as e:
        console.print(f"[red]Corpus loading error:[/red] {e}")
        sys.exit(1)
    except ContentOptimizationError as e:
        console.print(f"[red]Analysis error:[/red] {e}")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]File error:[/red] {e}")
        sys.exit(1)


def _display_report(
    result: ContentOptimizationResult,
    title: Optional[str],
    verbose: bool,
) -> None:
    """Display the analysis report."""
    heading = f"Overall score: {result.overall_score}/100"
    if title:
        heading = f"{title}\n{heading}"
    console.print(Panel.fit(
        f"[bold {_score_style(result.overall_score)}]{heading}[/]",
        border_style=_score_style(result.overall_score),
    ))

    score_table = Table(title="Component Scores", show_header=True)
    score_table.add_column("Component", style="cyan")
    score_table.add_column("Score", justify="right")
    for name, score in result.component_scores.items():
        score_table.add_row(
            name.replace("_", " ").title(),
            f"[{_score_style(score)}]{score:.0f}[/]",
        )
    console.print(score_table)

    readability = result.readability
    length = result.content_length
    console.print(
        f"\n[cyan]Readability:[/cyan] {readability.classification.value} "
        f"(ease {readability.flesch_reading_ease:.1f}, {readability.grade})"
    )
    console.print(
        f"[cyan]Length:[/cyan] {length.current_word_count} words, "
        f"{length.status.value} (target {length.recommended_range.min}-"
        f"{length.recommended_range.max} for {length.content_type})"
    )
    console.print(
        f"[cyan]Images:[/cyan] {result.image_validation.valid_images}/"
        f"{result.image_validation.total_images} with valid alt text"
    )

    if result.keyword_analysis.top_keywords:
        kw_table = Table(title="Top Keywords", show_header=True)
        kw_table.add_column("Keyword", style="green")
        kw_table.add_column("Count", justify="right")
        kw_table.add_column("Density", justify="right")
        kw_table.add_column("Classification")
        rows = result.keyword_analysis.top_keywords
        for kw in rows if verbose else rows[:5]:
            kw_table.add_row(
                kw.keyword,
                str(kw.frequency),
                f"{kw.density:.2f}%",
                kw.classification.value,
            )
        console.print(kw_table)

    if result.heading_structure.issues:
        console.print("\n[bold]Heading issues[/bold]")
        for issue in result.heading_structure.issues:
            color = "red" if issue.severity.value == "error" else "yellow"
            console.print(f"  [{color}]{issue.severity.value}[/]: {issue.message}")

    suggestions = result.internal_linking.suggestions
    if suggestions:
        link_table = Table(title="Internal Link Suggestions", show_header=True)
        link_table.add_column("Anchor", style="green")
        link_table.add_column("Target")
        link_table.add_column("Relevance", justify="right")
        for suggestion in suggestions:
            link_table.add_row(
                suggestion.anchor_text,
                suggestion.url or suggestion.target_id,
                str(suggestion.relevance_score),
            )
        console.print(link_table)

    summary = result.summary
    sections = [
        ("Strengths", summary.strengths, "green"),
        ("Issues", summary.issues, "yellow"),
        ("Priority fixes", summary.priority_fixes, "red"),
        ("Quick wins", summary.quick_wins, "cyan"),
    ]
    for label, items, color in sections:
        if items:
            console.print(f"\n[bold {color}]{label}[/]")
            for item in items:
                console.print(f"  - {item}")

    for warning in result.warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")

    if verbose:
        console.print(f"\n[dim]Processing time: {result.processing_time_ms:.0f} ms[/dim]")


def run_cli() -> None:
    """Entry point for the CLI."""
    main()


if __name__ == "__main__":
    run_cli()
