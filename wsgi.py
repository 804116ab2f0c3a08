from auth_api.main import app as application

# This 'application' object is what ASGI servers look for
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("auth_api.main:app", host="0.0.0.0", port=4000)
