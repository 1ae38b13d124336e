"""
HAProxy Configuration Parser
Parses HAProxy config files into global/defaults lines, frontends and backends
"""

import re
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from haproxy_admin.models.config import Backend, Bind, Configuration, Frontend, Server

logger = logging.getLogger(__name__)

# Section keywords the panel does not manage; their bodies are skipped
UNMANAGED_SECTIONS = (
    'listen', 'resolvers', 'peers', 'userlist', 'mailers',
    'program', 'http-errors', 'cache', 'ring',
)

INLINE_COMMENT_RE = re.compile(r'\s+#.*$')


@dataclass
class ParseResult:
    """Result of parsing HAProxy config"""
    configuration: Configuration
    warnings: List[str] = field(default_factory=list)


@dataclass
class _SectionDraft:
    """Section currently being read: 'global', 'defaults', 'frontend', 'backend' or 'skip'"""
    kind: str
    entity: Optional[Union[Frontend, Backend]] = None


class HAProxyConfigParser:
    """Parser for HAProxy configuration files

    Every call to parse() works on its own local state, a parser instance can
    be shared freely.
    """

    def parse(self, config_content: str) -> ParseResult:
        """
        Parse HAProxy configuration content

        Args:
            config_content: HAProxy configuration file content

        Returns:
            ParseResult with the parsed configuration and any warnings.
            Malformed bind/server lines are skipped and reported as warnings,
            parsing itself never fails.
        """
        config = Configuration()
        warnings: List[str] = []
        section: Optional[_SectionDraft] = None

        for line_num, raw_line in enumerate(config_content.split('\n'), 1):
            line = raw_line.strip()

            if not line or line.startswith('#'):
                continue

            keyword = line.split()[0].lower()

            if keyword in ('frontend', 'backend'):
                self._flush(section, config)
                section = self._open_named_section(keyword, line, line_num, warnings)
                continue

            if keyword in ('global', 'defaults'):
                self._flush(section, config)
                section = _SectionDraft(kind=keyword)
                continue

            if keyword in UNMANAGED_SECTIONS:
                self._flush(section, config)
                section = _SectionDraft(kind='skip')
                warnings.append(
                    f"Line {line_num}: '{keyword}' section is not managed and was skipped."
                )
                continue

            if section is None:
                logger.debug(f"Line {line_num}: directive outside of any section ignored: {line}")
                continue

            if section.kind == 'global':
                config.global_lines.append(line)
            elif section.kind == 'defaults':
                config.defaults_lines.append(line)
            elif section.kind == 'frontend':
                self._parse_frontend_line(section.entity, line, line_num, warnings)
            elif section.kind == 'backend':
                self._parse_backend_line(section.entity, line, line_num, warnings)

        self._flush(section, config)
        self._check_duplicate_names(config, warnings)

        return ParseResult(configuration=config, warnings=warnings)

    def _open_named_section(
        self, keyword: str, line: str, line_num: int, warnings: List[str]
    ) -> _SectionDraft:
        tokens = line.split()
        if len(tokens) < 2:
            warnings.append(f"Line {line_num}: '{keyword}' section without a name was skipped.")
            return _SectionDraft(kind='skip')

        name = tokens[1]
        logger.debug(f"Found {keyword} section: {name}")
        if keyword == 'frontend':
            return _SectionDraft(kind='frontend', entity=Frontend(name=name))
        return _SectionDraft(kind='backend', entity=Backend(name=name))

    @staticmethod
    def _flush(section: Optional[_SectionDraft], config: Configuration):
        """Append a finished frontend/backend draft to the configuration"""
        if section is None or section.entity is None:
            return
        if section.kind == 'frontend':
            config.frontends.append(section.entity)
        elif section.kind == 'backend':
            config.backends.append(section.entity)

    def _parse_frontend_line(self, frontend: Frontend, line: str, line_num: int, warnings: List[str]):
        tokens = INLINE_COMMENT_RE.sub('', line).split()
        directive = tokens[0].lower()

        if directive == 'bind':
            if len(tokens) < 2:
                warnings.append(f"Frontend '{frontend.name}' line {line_num}: bind without address skipped.")
                return
            address = self._split_address(tokens[1])
            if address is None:
                warnings.append(
                    f"Frontend '{frontend.name}' line {line_num}: malformed bind address "
                    f"'{tokens[1]}' skipped (expected <ip>:<port>)."
                )
                return
            ip_address, port = address
            frontend.binds.append(Bind(ip_address=ip_address or '*', port=port))

        elif directive == 'mode' and len(tokens) >= 2:
            frontend.mode = tokens[1].lower()

        elif directive == 'default_backend' and len(tokens) >= 2:
            frontend.default_backend = tokens[1]

        else:
            logger.debug(f"Frontend '{frontend.name}': unsupported directive dropped: {line}")

    def _parse_backend_line(self, backend: Backend, line: str, line_num: int, warnings: List[str]):
        tokens = INLINE_COMMENT_RE.sub('', line).split()
        directive = tokens[0].lower()

        if directive == 'server':
            if len(tokens) < 3:
                warnings.append(
                    f"Backend '{backend.name}' line {line_num}: server line needs a name and an address, skipped."
                )
                return
            address = self._split_address(tokens[2])
            if address is None:
                warnings.append(
                    f"Backend '{backend.name}' line {line_num}: malformed address '{tokens[2]}' "
                    f"for server '{tokens[1]}' skipped (expected <ip>:<port>)."
                )
                return
            ip_address, port = address
            backend.servers.append(Server(
                name=tokens[1],
                ip_address=ip_address,
                port=port,
                check='check' in tokens[3:],
            ))

        elif directive == 'mode' and len(tokens) >= 2:
            backend.mode = tokens[1].lower()

        else:
            logger.debug(f"Backend '{backend.name}': unsupported directive dropped: {line}")

    @staticmethod
    def _split_address(address: str) -> Optional[Tuple[str, int]]:
        """Split '<ip>:<port>' on the last colon, None when malformed"""
        ip_address, sep, port = address.rpartition(':')
        if not sep or not port.isdigit():
            return None
        return ip_address, int(port)

    @staticmethod
    def _check_duplicate_names(config: Configuration, warnings: List[str]):
        for kind, entities in (('Frontend', config.frontends), ('Backend', config.backends)):
            seen = set()
            for entity in entities:
                if entity.name in seen:
                    warnings.append(
                        f"{kind} '{entity.name}' is declared more than once, all occurrences were kept."
                    )
                seen.add(entity.name)


def parse_haproxy_config_with_warnings(config_content: str) -> ParseResult:
    """Parse HAProxy configuration content, keeping the parser warnings"""
    parser = HAProxyConfigParser()
    return parser.parse(config_content)


def parse_haproxy_config(config_content: str) -> Configuration:
    """
    Parse HAProxy configuration content

    Args:
        config_content: HAProxy configuration file content

    Returns:
        Configuration with the parsed entities
    """
    return parse_haproxy_config_with_warnings(config_content).configuration
