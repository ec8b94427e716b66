"""
This file is used to run the application from the backend directory.
It simply imports and runs the FastAPI app from the ojt_records package.
"""
import uvicorn

from ojt_records.config import get_settings

if __name__ == "__main__":
    uvicorn.run("ojt_records.main:app", host="0.0.0.0", port=get_settings().port, reload=True)
