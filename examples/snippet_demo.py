#!/usr/bin/env python3
"""
curlgen demo
Describe the request, get the PHP that sends it.
"""

from curlgen import SnippetBuilder


def demo():
    print("=" * 60)
    print("CURLGEN DEMO")
    print("=" * 60)

    # --- Example 1: GET with a query string ---
    get = SnippetBuilder("https://req.wiki-api.ir/apis-1/ChatGPT", "get")
    get.set_payload("url-encode", {"q": "hello AI"})
    get.set_headers({"Content-Type": "application/json"})
    get.set_timeout(30, 10)

    print("\n[GET, plain]")
    print(get.render(0))

    # --- Example 2: POST with a JSON body ---
    post = SnippetBuilder.from_request({
        "url": "https://example.com/items",
        "method": "POST",
        "payload": {"type": "JSON", "content": {"name": "widget", "qty": 2}},
        "timeout": {"total": 15, "connect": 5},
    })

    print("\n[POST, escaped for html]")
    print(post.render(1))


if __name__ == "__main__":
    demo()
