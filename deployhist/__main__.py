#!/usr/bin/env python

import logging
import sys

import click

FORMAT_TYPES = ("json", "tokens", "spans", "builds")


def read_data(fp):
    if fp.endswith(".bz2"):
        import bz2
        with bz2.open(fp, 'rb') as f:
            return f.read()
    elif fp.endswith(".gz"):
        import gzip
        with gzip.open(fp, 'rb') as f:
            return f.read()
    else:
        with open(fp, 'rb') as f:
            return f.read()


def iter_data(files):
    if len(files) == 0:
        yield sys.stdin.buffer.read()
    else:
        for fp in files:
            yield read_data(fp)


def format_token(token):
    from deployhist.tokens import Job
    if isinstance(token, Job):
        items = [token.type_name, token.action.value, token.kind, token.build,
                 token.time.isoformat()]
        if token.version is not None:
            items.append(str(token.version))
        if token.githash:
            items.append(token.githash)
        return " ".join(items)
    else:
        return "{0} {1!r}".format(token.type_name, token.value)


def format_stream(lexer, data, format_type, indent=None):
    from deployhist.stream import dumps, count_builds
    if format_type == "json":
        return dumps(lexer.process(data), indent=indent)
    elif format_type == "tokens":
        return "\n".join(format_token(token) for token in lexer.process(data))
    elif format_type == "spans":
        return "\n".join("{0}\t{1}\t{2}".format(span.start, span.end,
                                                format_token(span.token))
                         for span in lexer.process_spans(data))
    elif format_type == "builds":
        lines = []
        for build, c in count_builds(lexer.process(data)).items():
            lines.append("{0}\t{1}\t{2}\t{3}".format(
                build, c.count, c.first.isoformat(), c.last.isoformat()))
        return "\n".join(lines)


@click.command()
@click.argument("files", nargs=-1)
@click.option("--config", "-c", default=None,
              help="filename of lexer option file")
@click.option("--timezone", "-z", default=None,
              help="timezone of job timestamps (default: America/Los_Angeles)")
@click.option("--encoding", default=None,
              help="encoding to load input data")
@click.option("--output", "-o", default=None,
              help="output filename")
@click.option("--type", "-t", "format_type", default="json",
              type=click.Choice(FORMAT_TYPES),
              help="output format type, one of [json, tokens, spans, builds]")
@click.option("--indent", default=None, type=int,
              help="indent width of json output")
@click.option("--verbose", "-v", is_flag=True,
              help="verbose output to stderr")
def main(files, config, timezone, encoding, output, format_type, indent, verbose):
    """Tokenize deploy histories given in FILES (or stdin if FILES not given)."""

    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    from deployhist._common import DeployHistError, resolve_timezone
    from deployhist.lexer import Lexer
    from deployhist.load import load_config

    try:
        kwargs = load_config(config) if config else {}
        if timezone:
            kwargs["timezone"] = timezone
        kwargs["timezone"] = resolve_timezone(kwargs.get("timezone"))
        if encoding:
            kwargs["encoding"] = encoding
        lexer = Lexer(**kwargs)
    except DeployHistError as e:
        raise click.UsageError(str(e))

    if output:
        f_output = open(output, "w")
    else:
        f_output = sys.stdout

    try:
        for data in iter_data(files):
            buf = format_stream(lexer, data, format_type, indent=indent)
            if buf:
                f_output.write(buf + "\n")
    finally:
        if output:
            f_output.close()


if __name__ == "__main__":
    main()
