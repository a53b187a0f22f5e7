"""
Company endpoints.
"""
from fastapi import APIRouter, Depends, Request

from app.companies import CompanyRepository, get_company_repo
from app.schemas import CompanyFilter, CompanyNew, CompanyUpdate, parse_model
from security.auth import ensure_admin

router = APIRouter(prefix="/companies", tags=["companies"])


@router.post("", status_code=201, dependencies=[Depends(ensure_admin)])
def create_company(body: CompanyNew, companies: CompanyRepository = Depends(get_company_repo)):
    company = companies.create(body.model_dump())
    return {"company": company}


@router.get("")
def list_companies(request: Request, companies: CompanyRepository = Depends(get_company_repo)):
    """
    Returns {companies: [{handle, name, description, numEmployees, logoUrl}, ...]}

    Optional query filters: nameLike, minEmployees, maxEmployees.
    """
    filters = parse_model(CompanyFilter, request.query_params)
    return {"companies": companies.find_all(filters.model_dump(exclude_none=True))}


@router.get("/{handle}")
def get_company(handle: str, companies: CompanyRepository = Depends(get_company_repo)):
    """Returns {company: {handle, name, description, numEmployees, logoUrl, jobs}}"""
    return {"company": companies.get(handle)}


@router.patch("/{handle}", dependencies=[Depends(ensure_admin)])
def update_company(handle: str, body: CompanyUpdate, companies: CompanyRepository = Depends(get_company_repo)):
    company = companies.update(handle, body.model_dump(exclude_unset=True))
    return {"company": company}


@router.delete("/{handle}", dependencies=[Depends(ensure_admin)])
def delete_company(handle: str, companies: CompanyRepository = Depends(get_company_repo)):
    companies.remove(handle)
    return {"deleted": handle}
