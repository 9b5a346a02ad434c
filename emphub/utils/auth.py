# emphub/utils/auth.py
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session
from emphub.config.settings import settings
from emphub.database import get_db
from emphub.models.employee import Employee
from emphub.utils.roles import UserType, role_of

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login")

def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> Employee:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        username: str = payload.get("sub")
        if username is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    user = db.query(Employee).filter(Employee.username == username).first()
    if user is None:
        raise credentials_exception

    return user

def require_roles(*roles: UserType):
    """Dependency factory: admins always pass, everyone else needs one of roles"""
    allowed = {UserType(role) for role in roles}

    def checker(current_user: Employee = Depends(get_current_user)) -> Employee:
        role = role_of(current_user)
        if role is UserType.ADMIN or role in allowed:
            return current_user
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )

    return checker

require_admin = require_roles(UserType.ADMIN)
