"""
Print a bcrypt hash for a plaintext password, for seeding users by hand.
Run with: python -m scripts.hash_password <password> [--rounds N]
"""

import argparse
from care_api.security.passwords import DEFAULT_ROUNDS, PasswordHasher


def main():
    parser = argparse.ArgumentParser(description="Hash a password with bcrypt")
    parser.add_argument("password")
    parser.add_argument("--rounds", type=int, default=DEFAULT_ROUNDS)
    args = parser.parse_args()
    print(PasswordHasher(rounds=args.rounds).hash_sync(args.password))


if __name__ == "__main__":
    main()
