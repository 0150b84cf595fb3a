# backend/run.py
import sys
import uvicorn
from policy_files.config import settings

def main():
    try:
        uvicorn.run(
            "policy_files.main:app",
            host=settings.HOST,
            port=settings.PORT
        )
    except Exception as e:
        print(f"Error starting the server: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
