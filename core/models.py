from dataclasses import dataclass
from pathlib import Path
from typing import Optional

KINDS = {
    "PDF": ["pdf"],
    "ZIP": ["zip", "jar", "war", "epub"],
    "TAR": ["tar", "tgz", "tbz2", "txz", "tar.gz", "tar.bz2", "tar.xz", "tar.zst"],
    "RAR": ["rar"],
    "7Z": ["7z"],
    "STREAM": ["gz", "bz2", "xz"],
    "JSON": ["json", "json5"],
    "JSONL": ["jsonl", "ndjson"],
    "STRUCTURED": ["xml", "xsd", "xsl", "svg", "csv", "tsv"],
}

# archive members outside this list are never forwarded to the model
TEXT_EXTENSIONS = {
    "txt", "md", "markdown", "rst", "adoc", "log", "text",
    "json", "json5", "jsonl", "ndjson", "xml", "xsd", "xsl", "svg", "csv", "tsv",
    "yaml", "yml", "toml", "ini", "cfg", "conf", "properties", "env",
    "html", "htm", "css", "scss", "less", "js", "mjs", "cjs", "ts", "jsx", "tsx", "vue",
    "py", "pyi", "rb", "go", "rs", "c", "h", "cc", "cpp", "hpp", "cxx", "cs",
    "java", "kt", "kts", "scala", "swift", "m", "php", "pl", "lua", "r",
    "sh", "bash", "zsh", "fish", "ps1", "bat", "sql", "graphql", "proto",
    "gradle", "cmake", "mk", "tex", "bib", "diff", "patch", "srt", "vtt",
}
TEXT_FILENAMES = {
    "makefile", "dockerfile", "readme", "license", "changelog", "authors",
    "gemfile", "rakefile", "procfile", ".gitignore", ".dockerignore", ".editorconfig",
}

@dataclass(frozen=True)
class FileHandle:
    path: str
    name: str
    size_bytes: int

    @classmethod
    def from_path(cls, path: str, name: Optional[str] = None) -> "FileHandle":
        p = Path(path)
        return cls(path=str(p), name=name or p.name, size_bytes=p.stat().st_size)

@dataclass
class ExtractionUnit:
    name: str
    size_bytes: int
    is_dir: bool = False
    text: Optional[str] = None
    skipped: Optional[str] = None
    failed: Optional[str] = None

    def skip(self, reason: str) -> None:
        self.text = self.failed = None
        self.skipped = reason

    def fail(self, reason: str) -> None:
        self.text = self.skipped = None
        self.failed = reason

    def accept(self, text: str) -> None:
        self.skipped = self.failed = None
        self.text = text
