import os
from dotenv import load_dotenv

load_dotenv()

# Report the key sizes recorded by older consumers for ElGamal groups 17/18
# (6114 and 8096) instead of the real prime sizes (6144 and 8192).
ELGAMAL_LEGACY_KEY_SIZES = os.getenv("PGPKEYS_ELGAMAL_LEGACY_KEY_SIZES", "false").lower() == "true"

LOG_LEVEL = os.getenv("PGPKEYS_LOG_LEVEL", "INFO").upper()
