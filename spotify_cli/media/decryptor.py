"""
Decryption of the encrypted audio files served by the CDN.
"""

import logging

from Crypto.Cipher import AES
from Crypto.Util import Counter

from spotify_cli.exceptions import DecryptionError

log = logging.getLogger(__name__)

# Initial counter block shared by every audio file.
AUDIO_AES_IV = 0x72E067FBDDCBCF77EBE8BC643F630D93
AUDIO_KEY_SIZE = 16


class AudioDecryptor:
    """Decrypts whole audio files with AES-128 in CTR mode."""

    def decrypt(self, key: bytes, encrypted: bytes) -> bytes:
        """
        Decrypts a fully buffered file.

        Raises:
            DecryptionError: If the key is unusable.
        """
        if len(key) != AUDIO_KEY_SIZE:
            raise DecryptionError(
                f"Audio key must be {AUDIO_KEY_SIZE} bytes, got {len(key)}."
            )
        counter = Counter.new(128, initial_value=AUDIO_AES_IV)
        try:
            cipher = AES.new(key, AES.MODE_CTR, counter=counter)
            decrypted = cipher.decrypt(encrypted)
        except (ValueError, TypeError) as e:
            raise DecryptionError(str(e)) from e
        log.debug(f"Decrypted {len(decrypted)} bytes.")
        return decrypted
