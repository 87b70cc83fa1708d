"""Backend services for the zzptax calculator."""
