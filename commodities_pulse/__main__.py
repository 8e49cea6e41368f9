# python -m commodities_pulse
import uvicorn

from commodities_pulse import config


def main() -> None:
    # log_config=None keeps the JSON dictConfig applied by commodities_pulse.main
    uvicorn.run("commodities_pulse.main:app", host=config.HOST, port=config.PORT, log_config=None)


if __name__ == "__main__":
    main()
