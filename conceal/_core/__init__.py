"""Private engine: field discovery, codecs, ciphers and the transform driver."""
