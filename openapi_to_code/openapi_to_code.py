import json
from pathlib import Path

import click

from .docread import load_field_tables, scrape_dir
from .errors import DocumentationError, GenerationFailed, SchemaLoadError
from .logging import configure_logging, get_logger
from .pipeline import CodeGeneratorConfig, PipelineGenerator
from .schema_model import load_document

logger = get_logger("cli")


def load_doc_tables(docs: str):
    """Tables from a directory of markdown files or a JSON dump of tables."""
    docs_path = Path(docs)
    if docs_path.is_dir():
        return scrape_dir(docs_path)
    with open(docs_path, encoding="utf-8") as f:
        return load_field_tables(json.load(f))


@click.command()
@click.option("--package", "-p", default=None, type=str, help="Go package name of the generated file")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--docs",
    "-d",
    default=None,
    type=click.Path(exists=True, resolve_path=True),
    help="Markdown documentation directory, or a JSON file of documentation tables",
)
@click.option("--workers", "-j", default=0, type=int, help="Number of parallel workers (0 = number of CPUs)")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output")
@click.option("--log-file", default=None, type=click.Path(dir_okay=False, writable=True), help="Also write the log to this file")
@click.argument("path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default="-", type=click.Path(allow_dash=True))
def openapi_to_code(package, config, docs, workers, verbose, log_file, path, output):
    configure_logging(verbose=verbose, log_file=Path(log_file) if log_file else None)

    with open(path, encoding="utf-8") as f:
        raw = json.load(f)

    if config is not None:
        with open(config, encoding="utf-8") as f:
            config = CodeGeneratorConfig.from_dict(json.load(f))
    else:
        config = CodeGeneratorConfig()

    # CLI flags override the config file
    if package is not None:
        config.package_name = package
    if workers:
        config.max_workers = workers

    try:
        document = load_document(raw)
        doc_tables = load_doc_tables(docs) if docs is not None else []
    except (SchemaLoadError, DocumentationError) as e:
        raise click.ClickException(str(e)) from e

    if doc_tables:
        logger.info("loaded %d documentation tables", len(doc_tables))
        config.apply_doc_comments = True

    codegen = PipelineGenerator(document, config, doc_tables=doc_tables)
    result = codegen.generate()

    # The output is written even when errors were recorded
    with click.open_file(output, "w", encoding="utf-8") as f:
        f.write(result.code)

    try:
        result.raise_for_errors()
    except GenerationFailed as e:
        raise click.ClickException(str(e)) from e
