import sys

from vizschema.execution.config_executor import ConfigExecutor


def main():
    if len(sys.argv) != 2:
        print("Usage: python -m vizschema.run_config <config.yaml>")
        sys.exit(1)

    executor = ConfigExecutor(sys.argv[1])
    result = executor.execute()
    schema = result["schema"]

    print("\n=== Execution Completed ===")
    print(f"Strategy: {schema.get('strategy')}")
    print(f"Fields: {len(schema.get('schema', []))}")
    print(f"Fingerprint: {schema.get('fingerprint')}")
    print(f"Output: {result.get('output_dir')}")


if __name__ == "__main__":
    main()
