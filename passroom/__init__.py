"""Passroom backend: passphrase-protected media channels with cloud recording."""
