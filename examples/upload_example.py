#!/usr/bin/env python3
"""
Example usage of the upload and file endpoints
"""

import mimetypes
import sys
from pathlib import Path

import requests


def upload_file(file_path: str, process: bool = True, base_url: str = "http://localhost:8000"):
    """
    Upload a file and print the stored key

    Args:
        file_path: Path to the file to upload
        process: Ask the server to transcode video to the web profile
        base_url: Base URL of the API server
    """
    path = Path(file_path)
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"

    print(f"📤 Uploading {path.name} ({content_type}, process={process})")

    with open(path, 'rb') as f:
        files = {'file': (path.name, f, content_type)}
        response = requests.post(
            f"{base_url}/api/v1/upload",
            files=files,
            data={'process': 'true' if process else 'false'},
        )

    if response.status_code != 200:
        print(f"❌ Upload failed ({response.status_code}): {response.json()['error']}")
        return None

    key = response.json()['fileName']
    print(f"✅ Stored as {key}")
    return key


def share_link(key: str, base_url: str = "http://localhost:8000"):
    """Print the signed (and CDN, if configured) link for a stored key"""
    response = requests.get(f"{base_url}/api/v1/files/{key}/url")

    if response.status_code != 200:
        print(f"❌ Could not create link: {response.json()['error']}")
        return

    data = response.json()
    print(f"🔗 Signed link (valid {data['expiresIn']}s): {data['url']}")
    if data['publicUrl']:
        print(f"🌐 CDN link: {data['publicUrl']}")


def list_files(base_url: str = "http://localhost:8000"):
    response = requests.get(f"{base_url}/api/v1/files")

    if response.status_code != 200:
        print(f"❌ Failed to list files: {response.json()['error']}")
        return

    data = response.json()
    print(f"\n📋 Stored files: {data['total']}")
    for item in data['files']:
        print(f"   - {item['name']} ({item['size']:,} bytes, {item['lastModified']})")


def main():
    if len(sys.argv) < 2:
        print("usage: upload_example.py <file> [--no-process]")
        sys.exit(1)

    key = upload_file(sys.argv[1], process="--no-process" not in sys.argv)
    if key:
        share_link(key)
    list_files()


if __name__ == "__main__":
    main()
