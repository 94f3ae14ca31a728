"""Launch the polygon export FastAPI server."""

import uvicorn


def main():
    uvicorn.run("polygon_export.server:app", host="0.0.0.0", port=8000, reload=True)


if __name__ == "__main__":
    main()
