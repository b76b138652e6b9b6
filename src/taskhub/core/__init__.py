"""Identity, access control, tenancy and the shared request plumbing."""
