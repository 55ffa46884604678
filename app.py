import argparse


def main(argv=None):
    """Run one of the two deployments on the configured port."""
    parser = argparse.ArgumentParser(description="Run a donation service")
    parser.add_argument("service", choices=["tracker", "matcher"], nargs="?", default="tracker")
    args = parser.parse_args(argv)

    # Each package configures its store on import, so only load the one asked for
    if args.service == "tracker":
        from tracker import app
        app.logger.info("Donation tracker running on http://0.0.0.0:%s", app.config['PORT'])
    else:
        from matcher import app
        app.logger.info("Help Hunger API running on http://0.0.0.0:%s", app.config['PORT'])

    # do NOT use debug=True in production
    app.run(host="0.0.0.0", port=app.config['PORT'], debug=False)


if __name__ == "__main__":
    main()
