"""legendary - Go coverage profiles to vim-legend reports and hitlists."""

__version__ = "0.1.0"
