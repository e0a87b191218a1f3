"""Static file extension to code-fence language table used by the include macro"""

from pathlib import PurePosixPath


EXT_TO_LANGUAGE: dict[str, str] = {
    'bash':  'bash',
    'c':     'c',
    'cfg':   'ini',
    'conf':  'ini',
    'cpp':   'cpp',
    'cs':    'csharp',
    'css':   'css',
    'csv':   'csv',
    'go':    'go',
    'h':     'c',
    'hpp':   'cpp',
    'html':  'html',
    'ini':   'ini',
    'java':  'java',
    'js':    'javascript',
    'json':  'json',
    'kt':    'kotlin',
    'lock':  'toml',
    'md':    'markdown',
    'php':   'php',
    'pl':    'perl',
    'pm':    'perl',
    'py':    'python',
    'rb':    'ruby',
    'rs':    'rust',
    'sh':    'bash',
    'sql':   'sql',
    'swift': 'swift',
    'toml':  'toml',
    'ts':    'typescript',
    'txt':   'text',
    'xml':   'xml',
    'yaml':  'yaml',
    'yml':   'yaml',
}

BASENAME_TO_LANGUAGE: dict[str, str] = {
    '.gitignore': 'gitignore',
}


def language_for(path: str) -> str | None:
    """Return the fence label for path, or None when it cannot be classified."""
    p = PurePosixPath(path)
    if p.name in BASENAME_TO_LANGUAGE:
        return BASENAME_TO_LANGUAGE[p.name]
    return EXT_TO_LANGUAGE.get(p.suffix[1:])
