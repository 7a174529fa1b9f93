"""
Command line interface for the minilang front end.

    minilang tokens FILE        show the token stream
    minilang ast FILE           show the parsed syntax tree
    minilang check FILE         parse and analyze, exit 1 if the program is invalid
"""

import sys
import logging

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.logging import RichHandler

from . import __version__
from .lexer import Lexer, LexerError, TokenType
from .parser import Parser, ParseError, format_ast
from .analyzer import SemanticAnalyzer

console = Console()


def _read_source(file: str) -> str:
    with open(file, 'r', encoding='utf-8') as f:
        return f.read()


def _parse_or_exit(file: str):
    """Parse ``file``, printing the error and exiting with status 1 on failure."""
    try:
        return Parser(_read_source(file), file).parse()
    except (LexerError, ParseError) as e:
        console.print(str(e), style="bold red", markup=False, highlight=False)
        if e.diagnostic.help_text:
            console.print(f"  help: {e.diagnostic.help_text}", style="dim", markup=False)
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="minilang")
@click.option("--verbose", "-v", is_flag=True, envvar="MINILANG_VERBOSE",
              help="Log front-end debug messages to stderr.")
def cli(verbose):
    """minilang front end - lexer, parser and semantic analyzer"""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
            force=True,
        )


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def tokens(file):
    """Show tokens of a minilang file"""
    lexer = Lexer(_read_source(file), file)

    table = Table(title="Tokens")
    table.add_column("Type", style="cyan")
    table.add_column("Lexeme", style="green")
    table.add_column("Line", style="yellow", justify="right")
    table.add_column("Column", style="yellow", justify="right")

    for token in lexer.tokenize():
        if token.type == TokenType.EOF:
            break
        style = "bold red" if token.type == TokenType.ERROR else None
        table.add_row(token.type.name, token.lexeme, str(token.line),
                      str(token.location.column), style=style)

    console.print(table)


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def ast(file):
    """Show AST of a minilang file"""
    program = _parse_or_exit(file)

    console.print(Panel.fit(
        format_ast(program),
        title="[bold blue]Abstract Syntax Tree[/bold blue]",
        border_style="blue"
    ))


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.option("--dump-symbols", is_flag=True, envvar="MINILANG_DUMP_SYMBOLS",
              help="Show the symbol table after analysis.")
@click.option("--explain", is_flag=True,
              help="Show location, help and suggestions for each diagnostic.")
def check(file, dump_symbols, explain):
    """Parse and semantically check a minilang file"""
    program = _parse_or_exit(file)

    result = SemanticAnalyzer(stream=console.file).analyze(program)

    if explain:
        for diagnostic in result.errors + result.warnings:
            console.print(diagnostic.diagnostic.render(), markup=False, highlight=False)

    if dump_symbols:
        table = Table(title="Symbol Table")
        table.add_column("Name", style="cyan")
        table.add_column("Type", style="green")
        table.add_column("Scope Level", justify="right")
        table.add_column("Line Declared", justify="right")
        table.add_column("Initialized")
        for symbol in result.symbols:
            table.add_row(symbol.name, str(symbol.symbol_type), str(symbol.scope_level),
                          str(symbol.declaration_line), "Yes" if symbol.is_initialized else "No")
        console.print(table)

    if not result.is_valid:
        console.print(f"[bold red]Semantic analysis failed with {len(result.errors)} error(s)[/bold red]")
        sys.exit(1)

    console.print("[bold green]Program is valid[/bold green]")


def main():
    """Entry point for the ``minilang`` console script."""
    cli()


if __name__ == "__main__":
    main()
