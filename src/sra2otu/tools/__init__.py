"""Thin command builders for the external binaries the pipeline drives."""
