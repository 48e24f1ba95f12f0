from __future__ import annotations

"""
cli – Command line front-end for expanding templates and sending requests.

    restplate expand '/repos/{owner}/{repo}' -v owner=octo -v repo=hello
    restplate expand -k query --name tags '{tags}' -v tags=a -v tags=b --format csv
    restplate variables '/users/{id}?fields={fields}'
    restplate request GET '/users/{id}' --target https://api.example.com -v id=7 --send

Repeating '-v NAME=VALUE' with the same name builds a list value.
Exit codes: 0 success, 1 unresolved expansion or transport failure,
2 invalid template or arguments.
"""

import argparse
import logging
import os
import sys
from typing import Any, Dict, List, NoReturn, Optional, Sequence

from restplate.client import Client
from restplate.collection_format import CollectionFormat
from restplate.config import ClientConfig
from restplate.core.interfaces.logging import LoggerFactoryProtocol
from restplate.errors import RestplateError, TemplateError, TransportError
from restplate.logging.factory import DefaultLoggerFactory
from restplate.logging.helpers import get_logger
from restplate.request_template import RequestTemplate
from restplate.template import BodyTemplate, HeaderTemplate, QueryTemplate, UriTemplate

logger = get_logger('cli')

_KINDS = ('uri', 'query', 'header', 'body')


class CliError(RestplateError):
    """Invalid command line usage detected after argparse."""


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog='restplate',
        description='restplate – relaxed RFC 6570 templates for HTTP requests',
    )
    p.add_argument('--json-logs', action='store_true', help='Emit logs as JSON lines on stderr.')
    p.add_argument('--log-level', default=None, metavar='LEVEL', help='DEBUG, INFO, WARNING or ERROR.')
    sub = p.add_subparsers(dest='command', metavar='COMMAND')
    sub.required = True

    exp = sub.add_parser('expand', help='Expand a single template and print the result.')
    exp.add_argument('template', metavar='TEMPLATE')
    exp.add_argument('-k', '--kind', choices=_KINDS, default='uri', help='Template flavour (default: uri).')
    exp.add_argument('-n', '--name', default=None, help='Parameter or header name (query and header kinds).')
    exp.add_argument(
        '-v', '--var', action='append', default=[], metavar='NAME=VALUE', dest='variables',
        help='Variable binding; repeat a name to build a list.',
    )
    exp.add_argument('--format', default=None, metavar='FORMAT', help='exploded, csv, ssv, tsv or pipes.')
    exp.add_argument('--no-encode-slash', action='store_true', help="Keep '/' unescaped in expanded values.")

    var = sub.add_parser('variables', help='List the variable names of a template.')
    var.add_argument('template', metavar='TEMPLATE')
    var.add_argument('-k', '--kind', choices=_KINDS, default='uri')

    req = sub.add_parser('request', help='Resolve a request template; optionally send it.')
    req.add_argument('method', metavar='METHOD')
    req.add_argument('uri', metavar='URI')
    req.add_argument('-t', '--target', default='', help='Absolute base URL.')
    req.add_argument(
        '-H', '--header', action='append', default=[], metavar='NAME:VALUE', dest='headers',
        help='Header template; repeatable.',
    )
    req.add_argument('-d', '--body', default=None, metavar='TEMPLATE', help='Body template.')
    req.add_argument('-v', '--var', action='append', default=[], metavar='NAME=VALUE', dest='variables')
    req.add_argument('--send', action='store_true', help='Send the request and print the response body.')
    return p


def _parse_variables(pairs: Sequence[str]) -> Dict[str, Any]:
    """Turn ['a=1', 'b=2', 'b=3'] into {'a': '1', 'b': ['2', '3']}."""
    variables: Dict[str, Any] = {}
    for pair in pairs:
        name, sep, value = pair.partition('=')
        if not sep or not name:
            raise CliError(f'invalid variable binding {pair!r}, expected NAME=VALUE')
        if name not in variables:
            variables[name] = value
        elif isinstance(variables[name], list):
            variables[name].append(value)
        else:
            variables[name] = [variables[name], value]
    return variables


def _build_template(ns: argparse.Namespace, cfg: ClientConfig):
    kind = ns.kind
    text = ns.template
    name = getattr(ns, 'name', None)
    if kind == 'uri':
        encode_slash = not getattr(ns, 'no_encode_slash', False)
        return UriTemplate.create(text, cfg.charset, encode_slash=encode_slash)
    if kind == 'body':
        return BodyTemplate.create(text, cfg.charset)
    if kind == 'header':
        return HeaderTemplate.create(name or 'X-Header', [text], cfg.charset)

    fmt = cfg.collection_format
    if getattr(ns, 'format', None):
        try:
            fmt = CollectionFormat.from_name(ns.format)
        except ValueError as exc:
            raise CliError(str(exc)) from None
    decode_slash = getattr(ns, 'no_encode_slash', False)
    return QueryTemplate.create(name or 'q', [text], cfg.charset, fmt, decode_slash)


def _build_request(ns: argparse.Namespace, client: Client) -> RequestTemplate:
    tpl = client.template(ns.method, ns.uri, target=ns.target)
    for raw in ns.headers:
        name, sep, value = raw.partition(':')
        if not sep or not name.strip():
            raise CliError(f'invalid header {raw!r}, expected NAME:VALUE')
        tpl = tpl.with_header(name.strip(), value.strip())
    if ns.body is not None:
        tpl = tpl.with_body_template(ns.body)
    return tpl


def _render_request(tpl: RequestTemplate) -> str:
    req = tpl.request()
    lines = [f'{req.method} {req.url}']
    lines.extend(f'{name}: {value}' for name, value in req.flat_headers().items())
    if req.body:
        lines.append('')
        lines.append(req.body.decode(req.charset, errors='replace'))
    return '\n'.join(lines)


def _configure_logging(
    ns: argparse.Namespace,
    cfg: ClientConfig,
    factory: Optional[LoggerFactoryProtocol] = None,
) -> LoggerFactoryProtocol:
    """Point the module logger at *factory*, or at a DefaultLoggerFactory built from *ns* and *cfg*."""
    level = cfg.log_level
    if ns.log_level:
        resolved = logging.getLevelName(ns.log_level.strip().upper())
        if not isinstance(resolved, int):
            raise CliError(f'unknown log level {ns.log_level!r}')
        level = resolved
    if factory is None:
        factory = DefaultLoggerFactory(json_logs=ns.json_logs or cfg.json_logs, level=level)
    global logger
    logger = factory.get_logger('cli')
    return factory


def run(
    argv: Sequence[str],
    *,
    client: Optional[Client] = None,
    logger_factory: Optional[LoggerFactoryProtocol] = None,
) -> Optional[str]:
    """Execute one CLI invocation and return its output, None when unresolved."""
    ns = _build_parser().parse_args(list(argv))
    cfg = client.config if client is not None else ClientConfig.from_env()
    factory = _configure_logging(ns, cfg, logger_factory)

    if ns.command == 'variables':
        names: List[str] = list(dict.fromkeys(_build_template(ns, cfg).variables))
        return '\n'.join(names)

    variables = _parse_variables(ns.variables)

    if ns.command == 'expand':
        template = _build_template(ns, cfg)
        logger.debug('expanding %r with %d variable(s)', str(template), len(variables))
        return template.expand(variables)

    client = client or Client(cfg, logger=factory.get_logger('client'))
    tpl = _build_request(ns, client)
    if not ns.send:
        return _render_request(tpl.resolve(variables))
    response = client.execute(tpl, variables)
    return response.text()


def main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """Entry point for the `restplate` console script."""
    try:
        output = run(sys.argv[1:] if argv is None else argv)
    except (TemplateError, CliError, ValueError) as exc:
        logger.error('%s', exc)
        raise SystemExit(2)
    except TransportError as exc:
        logger.error('%s', exc)
        raise SystemExit(1)
    except KeyboardInterrupt:
        logger.error('Interrupted by user.')
        raise SystemExit(130)
    except BrokenPipeError:
        raise SystemExit(0)
    except Exception as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('Unexpected error: %s', exc)
        raise SystemExit(1)

    if output is None:
        raise SystemExit(1)
    sys.stdout.write(output + '\n')
    raise SystemExit(0)


if __name__ == '__main__':
    main()
