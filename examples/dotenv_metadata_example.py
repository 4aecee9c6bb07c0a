"""Minimal example storing nested metadata next to dotenv content."""

from flatenv import DotenvStore, FlatDocument, flatten, unflatten


def main() -> None:
    """Flatten a metadata tree, write it with content lines and read it back."""
    metadata = {
        "mac": "ENC[AES256_GCM,data:abc]",
        "pgp": [{"fp": "85D77543B3D624B6", "enc": "-----BEGIN PGP MESSAGE-----\nwcBMA\n-----END PGP MESSAGE-----"}],
        "version": "3.7.3",
    }
    print("flat:", flatten(metadata))
    print("nested:", unflatten(flatten(metadata)))

    store = DotenvStore(metadata_prefix="meta_")
    text = store.emit_file(FlatDocument(items=[("DATABASE_URL", "postgres://db/app")], metadata=metadata))
    print(text, end="")

    document = store.load_file(text)
    print("content:", document.items)
    print("metadata:", document.metadata)


if __name__ == "__main__":
    main()
