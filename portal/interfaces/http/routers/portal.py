from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from ....application.dto import LoginInput, SignupInput, AddUserInput, ForgotMatricInput
from ....application.portal import Portal
from ....application.use_cases.manage_roster import ALL_DEPARTMENTS
from ....domain.entities import User
from ....domain import view_state as vs
from ..schemas import (
    FormReq,
    LoginReq,
    SignupReq,
    AddUserReq,
    ForgotMatricReq,
    UserOut,
    NotificationOut,
    ViewResp,
)

router = APIRouter(prefix="/api/portal", tags=["portal"])

def get_portal(request: Request) -> Portal:
    return request.app.state.portal

def user_out(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        firstName=user.first_name,
        lastName=user.last_name,
        email=user.email,
        role=user.role,
        dateStarted=user.date_started,
        profileImage=user.profile_image,
        department=user.department,
        matricNumber=user.matric_number,
    )

def render(portal: Portal, department: str = ALL_DEPARTMENTS) -> ViewResp:
    state = portal.view
    note = portal.notifications.current()
    resp = ViewResp(
        view=state.kind,
        notification=NotificationOut(
            message=note.message, kind=note.kind, duration=note.duration, details=note.details
        ) if note else None,
    )
    if isinstance(state, vs.Unauthenticated):
        resp.form = state.form
    elif isinstance(state, (vs.StudentCard, vs.AdminDashboard)):
        resp.user = user_out(state.user)
    if isinstance(state, vs.AdminDashboard):
        # статистика считается на каждом рендере по всему списку
        resp.department = department
        resp.roster = [user_out(u) for u in portal.filter_by_department(department)]
        resp.stats = portal.stats()
    return resp

def require_admin_view(portal: Portal = Depends(get_portal)) -> Portal:
    if not isinstance(portal.view, vs.AdminDashboard):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin required")
    return portal

# Действие и рендер идут под одной блокировкой портала,
# чтобы ответ показывал результат именно этого запроса.

@router.get("/view", response_model=ViewResp)
def view(department: str = Query(ALL_DEPARTMENTS), portal: Portal = Depends(get_portal)):
    with portal.lock:
        return render(portal, department)

@router.post("/form", response_model=ViewResp)
def show_form(payload: FormReq, portal: Portal = Depends(get_portal)):
    with portal.lock:
        try:
            portal.show_form(payload.form)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return render(portal)

@router.post("/login", response_model=ViewResp)
def login(payload: LoginReq, portal: Portal = Depends(get_portal)):
    with portal.lock:
        portal.login(LoginInput(
            email=payload.email,
            matric_number=payload.matric_number,
            password=payload.password,
        ))
        return render(portal)

@router.post("/signup", response_model=ViewResp)
def signup(payload: SignupReq, portal: Portal = Depends(get_portal)):
    with portal.lock:
        portal.signup(SignupInput(
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email,
            date_started=payload.date_started,
            department=payload.department,
            password=payload.password,
            profile_image=payload.profile_image,
        ))
        return render(portal)

@router.post("/logout", response_model=ViewResp)
def logout(portal: Portal = Depends(get_portal)):
    with portal.lock:
        portal.logout()
        return render(portal)

@router.post("/forgot-matric", response_model=ViewResp)
def forgot_matric(payload: ForgotMatricReq, portal: Portal = Depends(get_portal)):
    with portal.lock:
        portal.forgot_matric(ForgotMatricInput(email=payload.email, password=payload.password))
        return render(portal)

@router.delete("/notification", response_model=ViewResp)
def dismiss_notification(portal: Portal = Depends(get_portal)):
    with portal.lock:
        portal.notifications.dismiss()
        return render(portal)

# --- Admin-only:

@router.get("/roster", response_model=list[UserOut])
def roster(department: str = Query(ALL_DEPARTMENTS), portal: Portal = Depends(require_admin_view)):
    with portal.lock:
        return [user_out(u) for u in portal.filter_by_department(department)]

@router.post("/roster", response_model=ViewResp)
def add_user(payload: AddUserReq, portal: Portal = Depends(require_admin_view)):
    with portal.lock:
        portal.add_user(AddUserInput(
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email,
            date_started=payload.date_started,
            department=payload.department,
            profile_image=payload.profile_image,
        ))
        return render(portal)

@router.post("/roster/refresh", response_model=ViewResp)
def refresh_roster(portal: Portal = Depends(require_admin_view)):
    with portal.lock:
        portal.fetch_all_users()
        return render(portal)

@router.delete("/roster/{user_id}", response_model=ViewResp)
def delete_user(user_id: str, confirm: bool = Query(False), portal: Portal = Depends(require_admin_view)):
    # confirm=true - ответ администратора на вопрос "удалить?"
    with portal.lock:
        portal.delete_user(user_id, confirm=lambda _: confirm)
        return render(portal)
