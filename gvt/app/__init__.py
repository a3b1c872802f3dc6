"""Command line front end for GVT."""
