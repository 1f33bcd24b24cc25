import sys

from smarttranslate.services import ConfigResolver, LocalStore, ResultCache


def main():
    db_path = sys.argv[1] if len(sys.argv) > 1 else None
    config = ConfigResolver(store=LocalStore(db_path)).resolve()
    token = config.token
    print("endpoint:", config.endpoint_url)
    print("token:", (token[:4] + "***") if token else None)
    print("cached translations:", ResultCache(db_path).count())


if __name__ == "__main__":
    main()
