"""Report renderers: changelog JSON and security scan markdown."""
