#!/usr/bin/env python3
"""Simple usage example of TextCloak for masking log output.

This example demonstrates the main ways to use TextCloak:
1. Mask a value in one call
2. Stream masked text into a file-like destination
3. Chain strategies for structured values
4. Load field policies from YAML
"""

import io
import logging

from textcloak import PolicyLoader, all_chars, fixed_length, none, portion

POLICY = """
version: "1.0"
name: request-logging
case_sensitive: false
fields:
  password:
    kind: fixed_length
    parameters: {length: 8}
  card_number:
    kind: portion
    parameters: {keep_at_end: 4, fixed_total_length: 16}
  authorization:
    kind: chain
    segments:
      - {kind: none, until_length: 7}
      - {kind: all}
"""


def main():
    """Demonstrate simple masking workflows."""
    print("=" * 60)
    print("TextCloak Simple Usage Example")
    print("=" * 60)

    # Step 1: mask a single value
    print("\n1. Masking values...")
    card = portion().keep_at_end(4).build()
    print(f"  card number:  {card('4111111111111111')}")
    print(f"  password:     {fixed_length(8)('hunter2')}")

    # Step 2: stream into a destination without building the whole string
    print("\n2. Streaming through a writer...")
    destination = io.StringIO()
    with all_chars().stream_to(destination) as writer:
        for chunk in ("s3cr", "et-t", "oken"):
            writer.write(chunk)
    print(f"  token:        {destination.getvalue()}")

    # Step 3: keep a prefix readable and mask the rest
    print("\n3. Chaining strategies...")
    header = none().until_length(7).then(all_chars())
    print(f"  header:       {header('Bearer eyJhbGciOiJIUzI1NiJ9')}")

    # Step 4: policies map field names to strategies
    print("\n4. Applying a field policy...")
    policy = PolicyLoader().load_policy_from_string(POLICY)
    request = {
        "username": "admin",
        "Password": "hunter2",
        "card_number": "4111111111111111",
        "Authorization": "Bearer abc.def.ghi",
    }
    for name, value in request.items():
        print(f"  {name + ':':<14}{policy.mask_field(name, value)}")

    # Wrapped values can be logged safely
    print("\n5. Logging wrapped values...")
    logging.basicConfig(level=logging.INFO, format="  %(levelname)s %(message)s")
    secret = all_chars().obfuscate_object("hunter2")
    logging.getLogger(__name__).info(f"login attempt with password {secret}")


if __name__ == "__main__":
    main()
