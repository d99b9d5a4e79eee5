"""tagvault - note tags kept in YAML front matter."""

__version__ = "0.1.0"
