"""Blake2b, a Blake2b-driven generator, BlaMka, Argon2 memory filling and AES-based hashing."""

__version__ = "0.1.0"
__all__ = ["aes_hash", "argon2", "blake2", "blamka", "generator"]