"""Query layer: plain functions taking a Session, one module per aggregate."""
