"""Confirmator - entry point.

Polls each account for pending confirmations and accepts the ones the
selected policy allows:
1. Loads the authenticator credential file(s) given on the command line
2. Refreshes the account session
3. Fetches confirmations, accepting at most 10 per batch
4. Defers overflow to a quicker follow-up cycle, idles otherwise
5. Refreshes the session whenever it expires

Configuration comes from the environment (see confirmator.config).
"""

from confirmator.cli import main

if __name__ == "__main__":
    main()
