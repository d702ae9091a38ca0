import argparse
import sys
from typing import List

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from DocSeeker.build_corpus import CorpusBuilder
from DocSeeker.create_default_config import load_config
from DocSeeker.server import STATIC_DIR, parse_address, serve
from DocSeeker.tfidf_search.corpus import Corpus, CorpusFormatError
from DocSeeker.tfidf_search.tfidf_search import SearchResult, TFIDFSearchEngine

console = Console()


class DocSeekerCLI:
    """
    Command-line front end: index a folder, inspect a saved corpus,
    query it from the terminal or serve it over HTTP.
    """

    def __init__(self, config=None):
        self.config = config or load_config()
        self.engine = None

    def print_header(self):
        console.print(Panel(
            "[bold blue]DocSeeker[/bold blue] [yellow]TF-IDF Search[/yellow]",
            border_style="blue",
            width=80
        ))

    def index_folder(self, folder: str, output: str, follow_symlinks: bool = False) -> bool:
        """Index a folder and save the corpus to output"""
        if follow_symlinks:
            self.config["indexing"]["follow_symlinks"] = True

        builder = CorpusBuilder(config=self.config)
        console.print(f"Indexing folder: [cyan]{escape(folder)}[/cyan]")

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=console
        ) as progress:
            task = progress.add_task("Building corpus...", total=None)
            success = builder.build_from_directory(folder)
            progress.update(task, completed=True)

        if not success:
            console.print(f"[bold red]Error: could not index {escape(folder)}[/bold red]")
            return False

        try:
            builder.save_to_json(output)
        except (OSError, TypeError, ValueError) as e:
            console.print(f"[bold red]Error: could not save corpus to {escape(output)}:[/bold red] {escape(str(e))}")
            return False

        console.print(f"[green]Indexed [bold]{len(builder.corpus)}[/bold] documents into {escape(output)}[/green]")
        return True

    def load_corpus(self, index_file: str):
        """Load a corpus file, printing the reason on failure"""
        try:
            return Corpus.load_from_json(index_file)
        except OSError as e:
            console.print(f"[bold red]Error: could not load {escape(index_file)}:[/bold red] {escape(str(e))}")
        except CorpusFormatError as e:
            console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        return None

    def inspect_index(self, index_file: str, sample_size: int = 10) -> bool:
        console.print(f"Reading [cyan]{escape(index_file)}[/cyan] index file...")
        corpus = self.load_corpus(index_file)
        if corpus is None:
            return False

        console.print(f"Documents: [bold]{len(corpus)}[/bold]")
        if sample_size > 0 and len(corpus) > 0:
            table = Table(box=box.ROUNDED, title="[bold]Most frequent terms[/bold]")
            table.add_column("Term", style="cyan")
            table.add_column("Occurrences", style="yellow", justify="right")
            table.add_column("Documents", style="green", justify="right")
            for term, count in corpus.top_terms(sample_size):
                table.add_row(escape(term), str(count), str(corpus.document_frequency(term)))
            console.print(table)
        return True

    def load_engine(self, index_file: str) -> bool:
        corpus = self.load_corpus(index_file)
        if corpus is None:
            return False
        self.engine = TFIDFSearchEngine(corpus)
        console.print(f"[green]Loaded [bold]{len(corpus)}[/bold] documents[/green]")
        return True

    def search(self, query: str, top_k: int = 10) -> List[SearchResult]:
        if not self.engine:
            console.print("[bold red]Search engine not initialized.[/bold red]")
            return []

        results, execution_time = self.engine.search(query, top_k=top_k)
        console.print(f"[green]Found {len(results)} documents in {execution_time:.6f} seconds[/green]")
        return results

    def display_results(self, results: List[SearchResult]):
        if not results:
            console.print("[yellow]No results found.[/yellow]")
            return

        table = Table(
            box=box.HEAVY_EDGE,
            show_header=True,
            header_style="bold magenta",
            title=f"[bold]Found {len(results)} document(s) ranked by relevance[/bold]",
            title_style="yellow"
        )
        table.add_column("#", style="dim", width=4)
        table.add_column("Path", style="cyan")
        table.add_column("Score", style="yellow", width=10)

        for i, (path, score) in enumerate(results):
            table.add_row(str(i + 1), escape(path), f"{score:.4f}")

        console.print(table)

    def interactive(self, top_k: int = 10):
        console.print("\n[bold]DocSeeker Interactive Mode[/bold]")
        console.print("[dim]Type 'quit' to exit[/dim]")

        while True:
            try:
                query = console.input("\n[bold cyan]Query > [/bold cyan]").strip()
            except (EOFError, KeyboardInterrupt):
                break
            if query.lower() in ("quit", "exit", "q"):
                break
            if not query:
                console.print("[yellow]Empty query. Please try again.[/yellow]")
                continue
            self.display_results(self.search(query, top_k))

    def serve(self, index_file: str, address: str = None) -> bool:
        server_config = self.config.get("server", {})
        try:
            host, port = parse_address(address, server_config.get("host", "127.0.0.1"),
                                       int(server_config.get("port", 6969)))
        except ValueError:
            console.print(f"[bold red]Error: invalid address {escape(address)}[/bold red]")
            return False

        corpus = self.load_corpus(index_file)
        if corpus is None:
            return False

        static_dir = server_config.get("static_dir") or STATIC_DIR
        console.print(f"[green]Serving [bold]{len(corpus)}[/bold] documents at http://{host}:{port}[/green]")
        serve(corpus, host=host, port=port, static_dir=static_dir)
        return True


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docseeker",
        description='DocSeeker - TF-IDF search over a folder of documents'
    )
    subparsers = parser.add_subparsers(dest="command")

    index_parser = subparsers.add_parser("index", help="index <folder> and save the corpus to a JSON file")
    index_parser.add_argument("folder", help="Folder to index")
    index_parser.add_argument("--output", help="Path to output corpus file (default from config: index.json)")
    index_parser.add_argument("--follow-symlinks", action="store_true",
                              help="Follow symbolic links while indexing")

    inspect_parser = subparsers.add_parser("inspect", help="check how many documents are indexed in the file")
    inspect_parser.add_argument("index_file", help="Path to corpus file")
    inspect_parser.add_argument("--sample", type=int, default=10, help="Number of frequent terms to show")

    query_parser = subparsers.add_parser("query", help="search the corpus from the terminal")
    query_parser.add_argument("index_file", help="Path to corpus file")
    query_parser.add_argument("text", nargs="*", help="Query text")
    query_parser.add_argument("--top", type=positive_int, help="Number of top results to display")
    query_parser.add_argument("--interactive", action="store_true", help="Run in interactive mode")

    serve_parser = subparsers.add_parser("serve", help="start local HTTP server with web interface")
    serve_parser.add_argument("index_file", help="Path to corpus file")
    serve_parser.add_argument("address", nargs="?", help="host:port to listen on (default from config)")

    parser.add_argument("--config", help="Path to a config.json")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        console.print("[bold red]Error: no subcommand was provided[/bold red]")
        return 1

    cli = DocSeekerCLI(config=load_config(args.config))

    if args.command == "index":
        output = args.output or cli.config["indexing"].get("output", "index.json")
        success = cli.index_folder(args.folder, output, follow_symlinks=args.follow_symlinks)

    elif args.command == "inspect":
        success = cli.inspect_index(args.index_file, sample_size=args.sample)

    elif args.command == "query":
        top_k = args.top if args.top is not None else cli.config["search"].get("top_k", 10)
        success = cli.load_engine(args.index_file)
        if success:
            if args.interactive:
                cli.print_header()
                cli.interactive(top_k)
            elif args.text:
                cli.display_results(cli.search(" ".join(args.text), top_k))
            else:
                console.print("[bold red]Error: no query was provided[/bold red]")
                success = False

    else:
        success = cli.serve(args.index_file, args.address)

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
