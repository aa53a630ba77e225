#!/usr/bin/env python3
"""
Tencent Cloud API SDK - Machine Translation Example

Translates a sentence and detects its language. Credentials are read from
TENCENTCLOUD_SECRET_ID and TENCENTCLOUD_SECRET_KEY; without them the
example only prints the signed request it would send.
"""

import json
import logging
import os
import sys

# Add src to path for development
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from tencent_sdk import (
    ClientConfig,
    Credential,
    LoggingDelegate,
    TencentClient,
    TencentSDKError,
    HttpFailureError,
)


def offline_example():
    """Show the signed request without sending it"""
    print("=== Signed Request (offline) ===")

    client = TencentClient(Credential("AKIDEXAMPLE", "secret"), config=ClientConfig(default_region="ap-guangzhou"))
    call = (client.translate()
            .text_translate()
            .source_text("hello")
            .source("en")
            .target("zh")
            .project_id(0)
            .timestamp(1700000000)
            .build())

    request = call.prepare()
    print(f"POST {request.url}")
    for name, value in request.headers.items():
        print(f"   {name}: {value}")
    print(f"   body: {request.body.decode('utf-8')}")
    client.close()


def online_example(secret_id: str, secret_key: str):
    """Translate text and detect a language against the live endpoint"""
    print("\n=== Text Translation ===")

    with TencentClient(Credential(secret_id, secret_key), config=ClientConfig(default_region="ap-guangzhou")) as client:
        text = (client.translate()
                .text_translate()
                .source("it")
                .target("zh")
                .project_id(0)
                .source_text("Credere è destino")
                .delegate(LoggingDelegate())
                .build()
                .doit(lambda body: json.loads(body)["Response"]))
        print(f"   {json.dumps(text, ensure_ascii=False)}")

        print("\n=== Language Detection ===")
        detected = (client.translate()
                    .language_detect()
                    .text("Bonjour tout le monde")
                    .project_id(0)
                    .build()
                    .doit(lambda body: json.loads(body)["Response"]))
        print(f"   {detected}")


def main():
    """Run the examples"""
    logging.basicConfig(level=logging.DEBUG if "-v" in sys.argv else logging.INFO)
    print("Tencent Cloud API SDK - Machine Translation Examples")
    print("=" * 50)

    offline_example()

    secret_id = os.environ.get("TENCENTCLOUD_SECRET_ID")
    secret_key = os.environ.get("TENCENTCLOUD_SECRET_KEY")
    if not (secret_id and secret_key):
        print("\nSet TENCENTCLOUD_SECRET_ID and TENCENTCLOUD_SECRET_KEY to call the live API.")
        return

    try:
        online_example(secret_id, secret_key)
    except HttpFailureError as e:
        print(f"\nGateway rejected the request: HTTP {e.http_status}: {e.body[:200]!r}")
        sys.exit(1)
    except TencentSDKError as e:
        print(f"\nExample failed: {type(e).__name__}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
