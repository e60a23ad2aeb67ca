"""
Extension and ignore policy for archive entries.
Decides which paths are dropped from the tree and which files get their content embedded.
"""

import os


# Directories and files dropped from the tree entirely
IGNORED_NAMES = frozenset({
    'node_modules', '.git', '.svn', '.hg', 'dist', 'build', 'target',
    '.next', '.nuxt', 'coverage', '.nyc_output', '.cache', 'logs',
    '__pycache__', '.pytest_cache', '.tox', 'venv', 'env',
    '.DS_Store', 'Thumbs.db', '.vscode', '.idea',
})

# Extensions whose content is embedded in the formatted document
PROCESSABLE_EXTENSIONS = frozenset({
    '.js', '.jsx', '.ts', '.tsx', '.py', '.java', '.cpp', '.c', '.h', '.cs',
    '.php', '.rb', '.go', '.rs', '.swift', '.kt', '.scala', '.clj', '.hs',
    '.html', '.htm', '.css', '.scss', '.sass', '.less', '.xml', '.svg',
    '.json', '.yaml', '.yml', '.toml', '.ini', '.cfg', '.config',
    '.md', '.txt', '.rst', '.adoc', '.tex',
    '.sql', '.sh', '.bat', '.ps1', '.dockerfile', '.gitignore', '.env',
})

# Extension to fenced code block language
EXT_TO_LANG = {
    '.js': 'javascript',
    '.jsx': 'jsx',
    '.ts': 'typescript',
    '.tsx': 'tsx',
    '.py': 'python',
    '.java': 'java',
    '.cpp': 'cpp',
    '.c': 'c',
    '.h': 'c',
    '.cs': 'csharp',
    '.php': 'php',
    '.rb': 'ruby',
    '.go': 'go',
    '.rs': 'rust',
    '.swift': 'swift',
    '.kt': 'kotlin',
    '.scala': 'scala',
    '.html': 'html',
    '.htm': 'html',
    '.css': 'css',
    '.scss': 'scss',
    '.sass': 'sass',
    '.json': 'json',
    '.yaml': 'yaml',
    '.yml': 'yaml',
    '.xml': 'xml',
    '.svg': 'xml',
    '.md': 'markdown',
    '.sql': 'sql',
    '.sh': 'bash',
    '.dockerfile': 'dockerfile',
}

DEFAULT_LANGUAGE = 'text'


def is_ignored_segment(segment: str) -> bool:
    """True for denylisted names and hidden (dot-prefixed) segments"""
    return segment in IGNORED_NAMES or segment.startswith('.')


def is_ignored_path(path: str) -> bool:
    """True if any '/'-separated segment of the path is ignored"""
    return any(is_ignored_segment(part) for part in path.split('/'))


def get_file_extension(filename: str) -> str:
    """Lowercased extension including the dot, or '' when there is none"""
    return os.path.splitext(filename)[1].lower()


def is_processable_extension(extension: str) -> bool:
    return extension.lower() in PROCESSABLE_EXTENSIONS


def language_tag(extension: str) -> str:
    return EXT_TO_LANG.get(extension.lower(), DEFAULT_LANGUAGE)
