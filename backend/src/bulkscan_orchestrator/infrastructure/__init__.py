"""HTTP adapters implementing the domain ports."""
