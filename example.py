#!/usr/bin/env python3
"""
Example usage of the DynamoDB JSON Transformer.

This script demonstrates how to convert a DynamoDB typed document into
plain JSON, both from a file and from an in-memory object.
"""

import json
import logging
import tempfile
from pathlib import Path

from dynamo_json import DynamoJSONTransformer, MalformedSchemaError, transform_json


def main():
    """Main example function."""
    logging.basicConfig(level=logging.INFO)

    print("DynamoDB JSON Transformer Example")
    print("=" * 50)

    # Create sample data
    sample_data = {
        "order_id": {"S": "ORD-1001"},
        "placed_at": {"S": "2024-01-01T10:00:00Z"},
        "total": {"N": "149.90"},
        "paid": {"BOOL": "true"},
        "coupon": {"NULL": "true"},
        "customer": {
            "M": {
                "name": {"S": "Alice Johnson"},
                "email": {"S": "alice@example.com"}
            }
        },
        "lines": {
            "L": [
                {"M": {"sku": {"S": "BOOK-42"}, "qty": {"N": "2"}}},
                {"M": {"sku": {"S": "PEN-7"}, "qty": {"N": "10"}}}
            ]
        }
    }

    # In-memory transformation
    print("\nIn-memory result:")
    print(json.dumps(transform_json(sample_data), indent=2))

    transformer = DynamoJSONTransformer()

    with tempfile.TemporaryDirectory() as temp_dir:
        schema_path = Path(temp_dir) / "schema.json"
        schema_path.write_text(json.dumps(sample_data, indent=2), encoding="utf-8")

        print(f"\nTransforming {schema_path}...")
        result = transformer.transform_file(str(schema_path))

        if result.success:
            print("✅ Output:")
            transformer.writer.write(result.json_string)
            metrics = result.metrics
            print(f"📊 {metrics.input_size} bytes in, {metrics.output_size} bytes out, "
                  f"{metrics.duration * 1000:.2f}ms")
        else:
            for error in result.errors or []:
                print(f"❌ error : {error}")

    # Payload shape mismatches abort the whole transformation
    try:
        transform_json({"total": {"N": 149.9}})
    except MalformedSchemaError as e:
        print(f"\nRejected malformed document: {e}")


if __name__ == "__main__":
    main()
